"""Task repository interface."""

from typing import Protocol

from todolist.core.tasks import Task


class TaskRepository(Protocol):
    """Interface for storing tasks in any backend."""

    def add(self, task: Task) -> str:
        """Insert a task and return its new id."""
        ...

    def get(self, task_id: str) -> Task | None:
        """Fetch one task. Returns None if not found."""
        ...

    def fetch_upcoming(self, limit: int) -> list[Task]:
        """Fetch up to `limit` tasks, earliest date first."""
        ...

    def update(self, task: Task) -> bool:
        """Overwrite date, title, comment and repeat. Returns False if no row matched."""
        ...

    def set_date(self, task_id: str, new_date: str) -> bool:
        """Overwrite only the date. Returns False if no row matched."""
        ...

    def delete(self, task_id: str) -> int:
        """Delete a task. Returns the number of rows removed."""
        ...
