"""Configuration management for the todo list service."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TODO_HOME = Path(os.environ.get("TODO_HOME", Path.home() / "todolist"))
CONFIG_FILE = TODO_HOME / "config" / "todolist.conf"
DATA_DIR = TODO_HOME / "data"

DEFAULT_PORT = 7540


@dataclass
class Config:
    """Service configuration."""

    port: int = DEFAULT_PORT
    db_file: str = str(DATA_DIR / "scheduler.db")
    web_dir: str = "./web"
    list_limit: int = 10


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_int(key: str, value: str, fallback: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-integer {key.upper()}: {value!r}")
        return fallback


def _apply(config: Config, key: str, value: str) -> None:
    match key:
        case "port":
            config.port = _parse_int(key, value, config.port)
        case "db_file":
            config.db_file = value
        case "web_dir":
            config.web_dir = value
        case "list_limit":
            config.list_limit = _parse_int(key, value, config.list_limit)


def load_config(config_file: Path | None = None) -> Config:
    """
    Load configuration from todolist.conf, then TODO_* environment variables.

    File lines are `KEY = value`; blank lines and `#` comments are skipped.
    Environment variables win over the file.
    """
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, _, value = line.partition("=")
            _apply(config, key.strip().lower(), _unquote(value.strip()))

    env_keys = {
        "TODO_PORT": "port",
        "TODO_DBFILE": "db_file",
        "TODO_WEBDIR": "web_dir",
    }
    for env_name, key in env_keys.items():
        value = os.environ.get(env_name, "")
        if value:
            _apply(config, key, value)

    return config
