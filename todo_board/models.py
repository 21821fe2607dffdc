"""Task model and related types."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional


class Priority(str, Enum):
    """Task priority levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_string(cls, value: str) -> Priority:
        """Parse priority from string, case-insensitive."""
        try:
            return cls[value.strip().upper()]
        except KeyError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid priority '{value}'. Must be one of: {valid}")

    @classmethod
    def rank(cls, value: str) -> int:
        """Sort rank of a priority value; unknown values rank lowest."""
        return _PRIORITY_RANK.get(value, 0)


_PRIORITY_RANK = {
    Priority.HIGH.value: 3,
    Priority.MEDIUM.value: 2,
    Priority.LOW.value: 1,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value: Any) -> bool:
    """Parse a boolean from a bool or a yes/no style string."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"Invalid boolean: {value!r}")


@dataclass(frozen=True)
class TaskDefaults:
    """Values used by ``TaskManager.add`` for omitted fields."""

    title: str = "Untitled Task"
    priority: str = Priority.MEDIUM.value
    category: str = "general"


@dataclass(frozen=True)
class Task:
    """Immutable task representation.

    Tasks are only created by ``TaskManager.add``; changes produce a new
    Task with the same id and creation time.

    Attributes:
        id: Unique task identifier, assigned by the manager.
        title: Task title.
        completed: Completion status.
        priority: Priority value (see ``Priority``); free text is kept as is.
        category: Free-text category label.
        created_at: Creation timestamp.
    """

    id: int
    title: str
    completed: bool = False
    priority: str = Priority.MEDIUM.value
    category: str = "general"
    created_at: datetime = field(default_factory=datetime.now)

    def with_updates(
        self,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Task:
        """Create a new Task with updated fields."""
        changes: dict[str, Any] = {
            "title": title,
            "completed": completed,
            "priority": priority,
            "category": category,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def toggle_completed(self) -> Task:
        """Return a new Task with toggled completion status."""
        return self.with_updates(completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "priority": self.priority,
            "category": self.category,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], defaults: TaskDefaults = TaskDefaults()) -> Task:
        """Build a Task from a plain mapping (seed files, fixtures).

        ``id`` is required and must be a positive integer; ``completed``
        accepts booleans or yes/no style strings; ``created_at`` may be a
        datetime or an ISO string and defaults to now.
        """
        if "id" not in data:
            raise ValueError("Task mapping is missing 'id'")
        try:
            task_id = int(data["id"])
        except (TypeError, ValueError):
            raise ValueError(f"Invalid task id: {data['id']!r}")
        if task_id < 1:
            raise ValueError(f"Invalid task id: {data['id']!r}")

        try:
            completed = parse_bool(data.get("completed") or False)
        except ValueError:
            raise ValueError(f"Invalid completed for task {task_id}: {data['completed']!r}")

        created_at = data.get("created_at")
        if created_at is None:
            created_at = datetime.now()
        elif isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        elif not isinstance(created_at, datetime):
            raise ValueError(f"Invalid created_at for task {task_id}: {created_at!r}")

        return cls(
            id=task_id,
            title=str(data.get("title") or defaults.title),
            completed=completed,
            priority=str(data.get("priority") or defaults.priority),
            category=str(data.get("category") or defaults.category),
            created_at=created_at,
        )


@dataclass(frozen=True)
class TaskStats:
    """Aggregate counts over a task collection."""

    total: int
    completed: int
    pending: int
    completion_rate: int
    priority_stats: dict[str, int]
    category_stats: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "pending": self.pending,
            "completion_rate": self.completion_rate,
            "priority_stats": dict(self.priority_stats),
            "category_stats": dict(self.category_stats),
        }
