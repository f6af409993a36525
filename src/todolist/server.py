"""HTTP API and static file server."""

import logging
from pathlib import Path

from flask import Flask, current_app, jsonify, request, send_from_directory

from . import workflows
from .config import Config
from .core.errors import NotFound, TaskError, ValidationFailed
from .core.recurrence import parse_date
from .core.tasks import Task
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)

STORE_KEY = "todolist.store"


def _store() -> TaskRepository:
    return current_app.extensions[STORE_KEY]


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _require_id() -> str:
    """Task id from the query string; must be present and numeric."""
    task_id = request.args.get("id", "")
    if not task_id:
        raise ValidationFailed("Task id is required")
    if not task_id.isascii() or not task_id.isdigit():
        raise ValidationFailed(f"Invalid task id: {task_id!r}")
    return task_id


def _task_from_body() -> Task:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailed("Request body is not a JSON object")
    return Task.from_dict(data)


def next_date_view():
    now = request.args.get("now", "")
    if not now:
        return "now missing", 400, {"Content-Type": "text/plain; charset=utf-8"}

    try:
        parse_date(now)
    except TaskError:
        return "wrong time value", 400, {"Content-Type": "text/plain; charset=utf-8"}

    try:
        result = workflows.compute_next_date(
            now, request.args.get("date", ""), request.args.get("repeat", "")
        )
    except TaskError as e:
        # Clients treat an empty body as "no next date".
        logger.warning(f"nextdate failed: {e}")
        result = ""
    return result, 200, {"Content-Type": "text/plain; charset=utf-8"}


def task_view():
    store = _store()
    match request.method:
        case "GET" | "HEAD":
            return jsonify(workflows.get_task(store, _require_id()).to_dict())
        case "POST":
            task_id = workflows.add_task(store, _task_from_body())
            return jsonify({"id": int(task_id)})
        case "PUT":
            workflows.update_task(store, _task_from_body())
            return jsonify({})
        case "DELETE":
            workflows.delete_task(store, _require_id())
            return jsonify({})


def task_done_view():
    store = _store()
    task_id = _require_id()
    if request.method == "DELETE":
        workflows.delete_task(store, task_id)
    else:
        workflows.complete_task(store, task_id)
    return jsonify({})


def tasks_view():
    limit = current_app.config.get("LIST_LIMIT", 10)
    tasks = workflows.list_tasks(_store(), limit)
    return jsonify({"tasks": [t.to_dict() for t in tasks]})


def create_app(config: Config | None = None, store: TaskRepository | None = None) -> Flask:
    """Build the Flask app. A store is opened from config when none is given."""
    config = config or Config()
    web_dir = Path(config.web_dir).resolve()

    app = Flask(__name__, static_folder=None)
    app.config["LIST_LIMIT"] = config.list_limit
    app.extensions[STORE_KEY] = store if store is not None else workflows.get_store(config)

    app.add_url_rule("/api/nextdate", view_func=next_date_view, methods=["GET"])
    app.add_url_rule(
        "/api/task", view_func=task_view, methods=["GET", "POST", "PUT", "DELETE"]
    )
    app.add_url_rule("/api/task/done", view_func=task_done_view, methods=["POST", "DELETE"])
    app.add_url_rule("/api/tasks", view_func=tasks_view, methods=["GET"])

    @app.route("/", defaults={"path": "index.html"})
    @app.route("/<path:path>")
    def static_files(path: str):
        return send_from_directory(web_dir, path)

    @app.errorhandler(NotFound)
    def handle_not_found(e: NotFound):
        logger.info(f"{request.method} {request.path}: {e}")
        return _error(str(e), 404)

    @app.errorhandler(TaskError)
    def handle_task_error(e: TaskError):
        logger.info(f"{request.method} {request.path}: {e}")
        return _error(str(e), 400)

    return app


def run_server(config: Config, debug: bool = False) -> None:
    """Serve the API and web directory until interrupted."""
    app = create_app(config)
    logger.info(f"Starting server on port {config.port}")
    app.run(host="0.0.0.0", port=config.port, debug=debug)
