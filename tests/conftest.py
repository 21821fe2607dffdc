"""Shared fixtures for todo board tests."""

from __future__ import annotations

import os
from datetime import datetime, timedelta
from typing import Any, Optional, Sequence

import pytest
from todo_board.config import ENV_PREFIX
from todo_board.manager import TaskManager
from todo_board.seed import sample_tasks
from todo_board.ui import Filter, StatsView, TaskView, TodoUI


class FixedClock:
    """Deterministic clock advancing one minute per call."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 9, 0)) -> None:
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


class RecordingSurface:
    """Render surface that records every call for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.tasks: Sequence[TaskView] = []
        self.empty_message: Optional[str] = None
        self.stats: Optional[StatsView] = None
        self.active_filter: Optional[Filter] = None

    def show_tasks(self, tasks: Sequence[TaskView], empty_message: Optional[str]) -> None:
        self.calls.append(("show_tasks", tasks))
        self.tasks = list(tasks)
        self.empty_message = empty_message

    def show_stats(self, stats: StatsView) -> None:
        self.calls.append(("show_stats", stats))
        self.stats = stats

    def mark_active_filter(self, active: Filter) -> None:
        self.calls.append(("mark_active_filter", active))
        self.active_filter = active

    @property
    def render_count(self) -> int:
        return sum(1 for name, _ in self.calls if name == "show_tasks")

    @property
    def visible_ids(self) -> list[int]:
        return [task.id for task in self.tasks]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isolate tests from the caller's environment and .env files."""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)
    monkeypatch.setattr("todo_board.config.load_dotenv", lambda **kwargs: False)


@pytest.fixture
def clock():
    """Clock starting at 2026-01-15 09:00."""
    return FixedClock()


@pytest.fixture
def manager(clock):
    """Empty task manager with a deterministic clock."""
    return TaskManager(clock=clock)


@pytest.fixture
def sample_manager(clock):
    """Task manager holding the four demo tasks."""
    return TaskManager(sample_tasks(), clock=clock)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def ui(sample_manager, surface):
    """UI over the demo board."""
    return TodoUI(sample_manager, surface)
