"""todolist - personal task reminders with repeat rules."""

__version__ = "0.1.0"
