"""Pure task lifecycle logic - no I/O dependencies."""

from dataclasses import dataclass, replace
from datetime import datetime, time

from .errors import ValidationFailed
from .recurrence import format_date, next_date, parse_date, parse_rule


@dataclass
class Task:
    """A reminder with an optional repeat rule."""

    id: str
    date: str
    title: str
    comment: str = ""
    repeat: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "comment": self.comment,
            "repeat": self.repeat,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from a decoded JSON request body. Raises ValidationFailed on non-string fields."""
        fields = {}
        for name in ("date", "title", "comment", "repeat"):
            value = data.get(name)
            if value is not None and not isinstance(value, str):
                raise ValidationFailed(f"Field {name!r} must be a string")
            fields[name] = value or ""
        task_id = data.get("id")
        return cls(id="" if task_id is None else str(task_id), **fields)


@dataclass(frozen=True)
class Completion:
    """Outcome of marking a task done: delete it, or move it to next_date."""

    delete: bool
    next_date: str = ""


def _midnight(now: datetime) -> datetime:
    return datetime.combine(now.date(), time())


def _require_title(task: Task) -> None:
    if not task.title:
        raise ValidationFailed("Task title is required")


def decide_create_date(requested: str, repeat: str, now: datetime) -> str:
    """
    Date to store for a new task.

    Past dates become today for one-shot tasks, or the next occurrence after
    today for repeating ones. Today and later are kept as given.
    """
    today = now.date()
    requested_date = parse_date(requested) if requested else today
    rule = parse_rule(repeat)

    if requested_date >= today:
        return format_date(requested_date)
    if rule.is_none:
        return format_date(today)
    return format_date(rule.advance(requested_date, _midnight(now)))


def validate_new_task(task: Task, now: datetime) -> Task:
    """Check a new task and return a copy carrying the date to store."""
    _require_title(task)
    return replace(task, date=decide_create_date(task.date, task.repeat, now))


def validate_update(task: Task, now: datetime) -> Task:
    """
    Check an edited task.

    Unlike creation, a past date is rejected rather than moved to today, and
    a repeat rule is mandatory.
    """
    if not task.id:
        raise ValidationFailed("Task id is required")
    if not task.id.isascii() or not task.id.isdigit():
        raise ValidationFailed(f"Invalid task id: {task.id!r}")
    _require_title(task)

    task_date = parse_date(task.date)
    if task_date < now.date():
        raise ValidationFailed("Task date cannot be in the past")
    if not task.repeat:
        raise ValidationFailed("Repeat rule is required")
    parse_rule(task.repeat)
    return replace(task, date=format_date(task_date))


def decide_completion(task: Task, now: datetime) -> Completion:
    """One-shot tasks are deleted when done; repeating tasks move forward."""
    if not task.repeat:
        return Completion(delete=True)
    return Completion(delete=False, next_date=next_date(now, task.date, task.repeat))
