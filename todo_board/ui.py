"""Presentation layer: turns user events into TaskManager calls and views.

The UI never touches the task list directly. Every handler calls one
TaskManager operation and then re-renders onto a ``RenderSurface``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Protocol, Sequence

from todo_board.manager import TaskManager
from todo_board.models import Priority, Task, TaskStats

logger = logging.getLogger(__name__)

EMPTY_MESSAGE = "No tasks found"


class Filter(str, Enum):
    """Named views over the task list."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"
    HIGH_PRIORITY = "high-priority"

    @classmethod
    def from_string(cls, value: str) -> Filter:
        """Parse a filter name, case-insensitive."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(f.value for f in cls)
            raise ValueError(f"Invalid filter '{value}'. Must be one of: {valid}")


class TaskAction(str, Enum):
    """Per-task actions a surface can emit."""

    TOGGLE = "toggle"
    DELETE = "delete"


@dataclass(frozen=True)
class TaskView:
    """What a surface needs to draw one task row."""

    id: int
    title: str
    priority: str
    category: str
    completed: bool
    action_label: str

    @classmethod
    def from_task(cls, task: Task) -> TaskView:
        return cls(
            id=task.id,
            title=task.title,
            priority=task.priority,
            category=task.category,
            completed=task.completed,
            action_label="Undo" if task.completed else "Complete",
        )


@dataclass(frozen=True)
class StatsView:
    """What a surface needs to draw the statistics panel."""

    total: int
    completed: int
    pending: int
    completion_rate: int
    priority_breakdown: tuple[tuple[str, int], ...]
    category_breakdown: tuple[tuple[str, int], ...]

    @classmethod
    def from_stats(cls, stats: TaskStats) -> StatsView:
        return cls(
            total=stats.total,
            completed=stats.completed,
            pending=stats.pending,
            completion_rate=stats.completion_rate,
            priority_breakdown=tuple(stats.priority_stats.items()),
            category_breakdown=tuple(stats.category_stats.items()),
        )


class RenderSurface(Protocol):
    """Anything that can display the board."""

    def show_tasks(self, tasks: Sequence[TaskView], empty_message: Optional[str]) -> None:
        """Draw the visible tasks, or ``empty_message`` when there are none."""

    def show_stats(self, stats: StatsView) -> None:
        """Draw aggregate statistics."""

    def mark_active_filter(self, active: Filter) -> None:
        """Highlight the control for the active filter."""


class TodoUI:
    """Bridges a TaskManager and a RenderSurface.

    Holds one piece of session state, ``current_filter``.
    """

    def __init__(self, manager: TaskManager, surface: RenderSurface) -> None:
        self._manager = manager
        self._surface = surface
        self.current_filter: Filter = Filter.ALL

    @property
    def manager(self) -> TaskManager:
        return self._manager

    def handle_add_task(self, form: Mapping[str, Any]) -> Optional[Task]:
        """Create a task from submitted form values.

        Blank titles are ignored silently: nothing is created or rendered.
        """
        title = str(form.get("title") or "").strip()
        if not title:
            logger.debug("Ignoring submission with blank title")
            return None

        task = self._manager.add(
            title=title,
            priority=form.get("priority") or None,
            category=form.get("category") or None,
        )
        self.render()
        return task

    def handle_toggle(self, task_id: int) -> Optional[Task]:
        task = self._manager.toggle(task_id)
        self.render()
        return task

    def handle_delete(self, task_id: int) -> Optional[Task]:
        task = self._manager.delete(task_id)
        self.render()
        return task

    def handle_task_action(self, task_id: int, action: str) -> Optional[Task]:
        """Dispatch a clicked task action; unknown actions are ignored."""
        if not task_id:
            return None
        if action == TaskAction.TOGGLE.value:
            return self.handle_toggle(task_id)
        if action == TaskAction.DELETE.value:
            return self.handle_delete(task_id)
        logger.debug("Ignoring unknown action %r for task #%s", action, task_id)
        return None

    def set_filter(self, name: str) -> None:
        self.current_filter = Filter.from_string(name)
        self.render()

    def visible_tasks(self) -> list[Task]:
        """Apply the current filter to the whole collection."""
        if self.current_filter is Filter.COMPLETED:
            return self._manager.filter(completed=True)
        if self.current_filter is Filter.PENDING:
            return self._manager.filter(completed=False)
        if self.current_filter is Filter.HIGH_PRIORITY:
            return self._manager.filter(priority=Priority.HIGH.value)
        return self._manager.tasks

    def render(self) -> None:
        """Redraw tasks, stats and the filter marker.

        Stats always cover the whole collection, not the filtered view.
        """
        views = [TaskView.from_task(task) for task in self.visible_tasks()]
        self._surface.show_tasks(views, None if views else EMPTY_MESSAGE)
        self._surface.show_stats(StatsView.from_stats(self._manager.stats()))
        self._surface.mark_active_filter(self.current_filter)
