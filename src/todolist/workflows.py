"""Shared workflow layer between the HTTP server and the CLI.

Each function validates through the pure core, then reads or writes the
repository. Errors from the core propagate unchanged.
"""

import logging
from datetime import datetime
from pathlib import Path

from .adapters.sqlite_store import SQLiteTaskStore
from .config import Config
from .core.errors import NotFound
from .core.recurrence import next_date, parse_date
from .core.tasks import Task, decide_completion, validate_new_task, validate_update
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)


def get_store(config: Config) -> SQLiteTaskStore:
    """Open the task store configured for this process."""
    return SQLiteTaskStore(Path(config.db_file))


def compute_next_date(now: str, anchor_date: str, repeat: str) -> str:
    """Next occurrence for the nextdate endpoint, with `now` given as YYYYMMDD."""
    reference = datetime.combine(parse_date(now), datetime.min.time())
    return next_date(reference, anchor_date, repeat)


def add_task(repo: TaskRepository, task: Task, now: datetime | None = None) -> str:
    """Validate a new task, store it, and return its id."""
    now = now or datetime.now()
    prepared = validate_new_task(task, now)
    task_id = repo.add(prepared)
    logger.info(f"Added task {task_id} on {prepared.date} (repeat={prepared.repeat!r})")
    return task_id


def get_task(repo: TaskRepository, task_id: str) -> Task:
    """Fetch one task or raise NotFound."""
    task = repo.get(task_id)
    if task is None:
        raise NotFound(f"Task {task_id} not found")
    return task


def list_tasks(repo: TaskRepository, limit: int = 10) -> list[Task]:
    """Upcoming tasks, earliest first."""
    return repo.fetch_upcoming(limit)


def update_task(repo: TaskRepository, task: Task, now: datetime | None = None) -> None:
    """Validate an edited task and overwrite the stored record."""
    now = now or datetime.now()
    prepared = validate_update(task, now)
    if not repo.update(prepared):
        raise NotFound(f"Task {task.id} not found")
    logger.info(f"Updated task {prepared.id}")


def complete_task(repo: TaskRepository, task_id: str, now: datetime | None = None) -> Task | None:
    """
    Mark a task done.

    One-shot tasks are deleted and None is returned. Repeating tasks get their
    next date and the updated task is returned.

    The read and the write are separate statements, so two concurrent
    completions of the same task can both advance from the same stored date.
    That race is accepted for a single-user list.
    """
    now = now or datetime.now()
    task = get_task(repo, task_id)
    completion = decide_completion(task, now)

    if completion.delete:
        if repo.delete(task_id) == 0:
            raise NotFound(f"Task {task_id} not found")
        logger.info(f"Completed one-shot task {task_id}, deleted")
        return None

    if not repo.set_date(task_id, completion.next_date):
        raise NotFound(f"Task {task_id} not found")
    logger.info(f"Completed task {task_id}, next on {completion.next_date}")
    task.date = completion.next_date
    return task


def delete_task(repo: TaskRepository, task_id: str) -> None:
    """Delete a task or raise NotFound."""
    if repo.delete(task_id) == 0:
        raise NotFound(f"Task {task_id} not found")
    logger.info(f"Deleted task {task_id}")
