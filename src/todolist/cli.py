"""todolist CLI - task reminders with repeat rules."""

import json
import logging
import sys
from datetime import datetime

import click

from . import workflows
from .config import load_config
from .core.errors import TaskError
from .core.tasks import Task


def _fail(e: TaskError) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _show_task(task: Task) -> None:
    repeat = f" [{task.repeat}]" if task.repeat else ""
    comment = f" - {task.comment}" if task.comment else ""
    click.echo(f"{task.id:>4}  {task.date}  {task.title}{repeat}{comment}")


@click.group()
@click.version_option()
def main():
    """todolist - personal task reminders."""
    pass


@main.command()
@click.option("--port", type=int, default=None, help="Port to listen on (default: TODO_PORT or 7540)")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def serve(port: int | None, debug: bool):
    """Run the HTTP server."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else logging.INFO,
    )
    config = load_config()
    if port is not None:
        config.port = port

    from .server import run_server

    click.echo(f"Starting server on port {config.port}")
    click.echo("Press Ctrl+C to stop")
    try:
        run_server(config, debug=debug)
    except KeyboardInterrupt:
        click.echo("\nServer stopped.")


@main.command("nextdate")
@click.argument("now")
@click.argument("anchor_date")
@click.argument("repeat")
def nextdate(now: str, anchor_date: str, repeat: str):
    """Print the next date after NOW for ANCHOR_DATE repeating by REPEAT."""
    try:
        click.echo(workflows.compute_next_date(now, anchor_date, repeat))
    except TaskError as e:
        _fail(e)


@main.command()
@click.argument("title")
@click.option("--date", "-d", "task_date", default="", help="Date (YYYYMMDD), defaults to today")
@click.option("--comment", "-c", default="", help="Free text comment")
@click.option("--repeat", "-r", default="", help="Repeat rule: 'd <days>' or 'y'")
def add(title: str, task_date: str, comment: str, repeat: str):
    """Add a task."""
    store = workflows.get_store(load_config())
    task = Task(id="", date=task_date, title=title, comment=comment, repeat=repeat)
    try:
        task_id = workflows.add_task(store, task)
    except TaskError as e:
        _fail(e)
    click.echo(f"Added task {task_id}")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(as_json: bool):
    """List upcoming tasks."""
    config = load_config()
    tasks = workflows.list_tasks(workflows.get_store(config), config.list_limit)

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in tasks], indent=2))
        return

    if not tasks:
        click.echo("No tasks.")
        return
    for task in tasks:
        _show_task(task)


@main.command()
@click.argument("task_id")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(task_id: str, as_json: bool):
    """Show one task."""
    try:
        task = workflows.get_task(workflows.get_store(load_config()), task_id)
    except TaskError as e:
        _fail(e)

    if as_json:
        click.echo(json.dumps(task.to_dict(), indent=2))
    else:
        _show_task(task)


@main.command()
@click.argument("task_id")
def done(task_id: str):
    """Mark a task done: one-shot tasks are removed, repeating ones move on."""
    store = workflows.get_store(load_config())
    try:
        task = workflows.complete_task(store, task_id, datetime.now())
    except TaskError as e:
        _fail(e)

    if task is None:
        click.echo(f"Task {task_id} done and removed.")
    else:
        click.echo(f"Task {task_id} done, next on {task.date}.")


@main.command()
@click.argument("task_id")
def delete(task_id: str):
    """Delete a task."""
    try:
        workflows.delete_task(workflows.get_store(load_config()), task_id)
    except TaskError as e:
        _fail(e)
    click.echo(f"Deleted task {task_id}")


if __name__ == "__main__":
    main()
