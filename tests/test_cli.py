"""Tests for the click CLI."""

import json
from datetime import date
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from todolist.cli import main
from todolist.config import Config


@pytest.fixture
def config(tmp_path):
    return Config(db_file=str(tmp_path / "scheduler.db"), web_dir=str(tmp_path))


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def patched_config(config):
    with patch("todolist.cli.load_config", return_value=config):
        yield


class TestNextDate:
    def test_prints_date(self, runner):
        result = runner.invoke(main, ["nextdate", "20250110", "20240101", "d 3"])
        assert result.exit_code == 0
        assert result.output.strip() == "20250113"

    def test_invalid_rule(self, runner):
        result = runner.invoke(main, ["nextdate", "20250110", "20240101", "w 3"])
        assert result.exit_code == 1
        assert "Error:" in result.output


class TestTaskCommands:
    def test_add_then_list(self, runner):
        result = runner.invoke(main, ["add", "Pay rent", "-d", "20990101", "-r", "d 30"])
        assert result.exit_code == 0
        assert "Added task 1" in result.output

        result = runner.invoke(main, ["list"])
        assert result.exit_code == 0
        assert "20990101" in result.output
        assert "Pay rent [d 30]" in result.output

    def test_list_empty(self, runner):
        result = runner.invoke(main, ["list"])
        assert result.output.strip() == "No tasks."

    def test_list_json(self, runner):
        runner.invoke(main, ["add", "Call", "-c", "mom"])
        result = runner.invoke(main, ["list", "--json"])
        data = json.loads(result.output)
        assert data[0]["title"] == "Call"
        assert data[0]["comment"] == "mom"
        assert data[0]["date"] == date.today().strftime("%Y%m%d")

    def test_add_without_title_fails(self, runner):
        result = runner.invoke(main, ["add", ""])
        assert result.exit_code == 1

    def test_show(self, runner):
        runner.invoke(main, ["add", "Dentist", "-d", "20990315", "-r", "y"])
        result = runner.invoke(main, ["show", "1", "--json"])
        assert json.loads(result.output)["repeat"] == "y"

    def test_show_missing(self, runner):
        result = runner.invoke(main, ["show", "8"])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_done_one_shot(self, runner):
        runner.invoke(main, ["add", "Once"])
        result = runner.invoke(main, ["done", "1"])
        assert result.exit_code == 0
        assert "removed" in result.output
        assert runner.invoke(main, ["done", "1"]).exit_code == 1

    def test_done_repeating(self, runner):
        runner.invoke(main, ["add", "Water plants", "-d", "20990101", "-r", "d 2"])
        result = runner.invoke(main, ["done", "1"])
        assert result.exit_code == 0
        assert "next on 20990103" in result.output

    def test_delete(self, runner):
        runner.invoke(main, ["add", "Gone"])
        assert runner.invoke(main, ["delete", "1"]).exit_code == 0
        assert runner.invoke(main, ["delete", "1"]).exit_code == 1


class TestServe:
    @patch("todolist.server.run_server")
    def test_port_override(self, mock_run, runner, config):
        result = runner.invoke(main, ["serve", "--port", "8123"])
        assert result.exit_code == 0
        mock_run.assert_called_once_with(config, debug=False)
        assert config.port == 8123
