"""Functional core - pure business logic with no I/O."""

from .errors import TaskError, NotFound, ValidationFailed
from .recurrence import (
    DATE_FORMAT,
    RecurrenceError,
    MissingRule,
    InvalidDateFormat,
    UnsupportedRuleFormat,
    InvalidDayCount,
    InvalidRule,
    RecurrenceRule,
    RuleKind,
    next_date,
    parse_date,
    parse_rule,
    format_date,
)
from .tasks import (
    Task,
    Completion,
    decide_create_date,
    decide_completion,
    validate_new_task,
    validate_update,
)

__all__ = [
    # Errors
    "TaskError",
    "NotFound",
    "ValidationFailed",
    "RecurrenceError",
    "MissingRule",
    "InvalidDateFormat",
    "UnsupportedRuleFormat",
    "InvalidDayCount",
    "InvalidRule",
    # Recurrence
    "DATE_FORMAT",
    "RecurrenceRule",
    "RuleKind",
    "next_date",
    "parse_date",
    "parse_rule",
    "format_date",
    # Tasks
    "Task",
    "Completion",
    "decide_create_date",
    "decide_completion",
    "validate_new_task",
    "validate_update",
]
