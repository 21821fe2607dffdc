"""In-memory task collection and the operations on it."""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Callable, Iterable, Iterator, Optional

from todo_board.models import Priority, Task, TaskDefaults, TaskStats

logger = logging.getLogger(__name__)


def _value(field: Optional[str]) -> Optional[str]:
    """Unwrap enum members so tasks only ever hold plain strings."""
    if isinstance(field, Priority):
        return field.value
    return field


class TaskManager:
    """Owns the task collection and every query and mutation on it.

    Tasks are immutable; mutations replace the stored Task with an updated
    copy, so callers never hold a reference that can change the collection.
    Lookups on unknown ids return None instead of raising.
    """

    def __init__(
        self,
        initial_tasks: Optional[Iterable[Task]] = None,
        *,
        defaults: TaskDefaults = TaskDefaults(),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the manager, optionally seeded with existing tasks."""
        self._tasks: list[Task] = list(initial_tasks or [])
        self._defaults = defaults
        self._clock = clock

        ids = [task.id for task in self._tasks]
        duplicates = sorted(i for i, n in Counter(ids).items() if n > 1)
        if duplicates:
            raise ValueError(f"Duplicate task ids: {duplicates}")
        self._next_id = max(ids) + 1 if ids else 1

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    @property
    def tasks(self) -> list[Task]:
        """All tasks in insertion order (a copy)."""
        return list(self._tasks)

    @property
    def defaults(self) -> TaskDefaults:
        return self._defaults

    def _index_of(self, task_id: int) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def add(
        self,
        title: Optional[str] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Task:
        """Create a task and append it to the collection.

        Missing or empty fields fall back to the configured defaults. Titles
        are not validated here.
        """
        task = Task(
            id=self._next_id,
            title=title or self._defaults.title,
            completed=False,
            priority=_value(priority) or self._defaults.priority,
            category=category or self._defaults.category,
            created_at=self._clock(),
        )
        self._next_id += 1
        self._tasks.append(task)
        logger.debug("Added task #%s %r", task.id, task.title)
        return task

    def get(self, task_id: int) -> Optional[Task]:
        """Return the task with the given id, or None."""
        index = self._index_of(task_id)
        return self._tasks[index] if index is not None else None

    def toggle(self, task_id: int) -> Optional[Task]:
        """Flip the completion status of a task."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("Toggle ignored, task #%s not found", task_id)
            return None
        toggled = self._tasks[index].toggle_completed()
        self._tasks[index] = toggled
        logger.debug("Task #%s completed=%s", task_id, toggled.completed)
        return toggled

    def update(
        self,
        task_id: int,
        *,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Optional[Task]:
        """Merge the given fields into a task; None means "leave unchanged"."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("Update ignored, task #%s not found", task_id)
            return None
        updated = self._tasks[index].with_updates(
            title=title,
            completed=completed,
            priority=_value(priority),
            category=category,
        )
        self._tasks[index] = updated
        logger.debug("Updated task #%s", task_id)
        return updated

    def delete(self, task_id: int) -> Optional[Task]:
        """Remove a task. Returns the removed task, or None if absent."""
        index = self._index_of(task_id)
        if index is None:
            logger.debug("Delete ignored, task #%s not found", task_id)
            return None
        removed = self._tasks.pop(index)
        logger.debug("Deleted task #%s", task_id)
        return removed

    def filter(
        self,
        category: Optional[str] = None,
        completed: Optional[bool] = None,
        priority: Optional[str] = None,
    ) -> list[Task]:
        """Return tasks matching every given criterion, in insertion order.

        ``None`` or empty-string criteria match everything; ``completed=False``
        selects pending tasks.
        """
        priority = _value(priority)
        return [
            task
            for task in self._tasks
            if (not category or task.category == category)
            and (completed is None or task.completed == completed)
            and (not priority or task.priority == priority)
        ]

    def stats(self) -> TaskStats:
        """Compute counts and completion rate over the whole collection."""
        total = len(self._tasks)
        completed = sum(1 for task in self._tasks if task.completed)

        priority_stats: dict[str, int] = {}
        category_stats: dict[str, int] = {}
        for task in self._tasks:
            priority_stats[task.priority] = priority_stats.get(task.priority, 0) + 1
            category_stats[task.category] = category_stats.get(task.category, 0) + 1

        # round half up: 1 of 8 done is 13%
        rate = (200 * completed + total) // (2 * total) if total else 0

        return TaskStats(
            total=total,
            completed=completed,
            pending=total - completed,
            completion_rate=rate,
            priority_stats=priority_stats,
            category_stats=category_stats,
        )

    def tasks_by_priority(self) -> list[Task]:
        """All tasks, highest priority first; ties keep insertion order."""
        return sorted(self._tasks, key=lambda task: Priority.rank(task.priority), reverse=True)
