"""Domain errors shared by the core and its callers."""


class TaskError(Exception):
    """Base class for every error the core reports to a caller."""

    pass


class NotFound(TaskError):
    """Raised when no task exists for an id."""

    pass


class ValidationFailed(TaskError):
    """Raised when task fields are missing or not acceptable."""

    pass
