"""Initial task lists: the demo board and YAML seed files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from todo_board.exceptions import ConfigError
from todo_board.models import Task, TaskDefaults

SAMPLE_TASKS: tuple[dict[str, Any], ...] = (
    {"id": 1, "title": "Buy groceries", "completed": False, "priority": "high", "category": "personal"},
    {"id": 2, "title": "Finish project", "completed": False, "priority": "high", "category": "work"},
    {"id": 3, "title": "Call mom", "completed": True, "priority": "medium", "category": "personal"},
    {"id": 4, "title": "Book dentist", "completed": False, "priority": "low", "category": "health"},
)


def sample_tasks(defaults: TaskDefaults = TaskDefaults()) -> list[Task]:
    """Fresh Task objects for the demo board."""
    return [Task.from_dict(raw, defaults) for raw in SAMPLE_TASKS]


def load_seed_file(path: str | Path, defaults: TaskDefaults = TaskDefaults()) -> list[Task]:
    """Load tasks from a YAML list of mappings.

    Each entry needs an ``id``; the other fields fall back to ``defaults``.

    Raises:
        ConfigError: If the file is unreadable or an entry is malformed.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as fp:
            data = yaml.safe_load(fp)
    except OSError as e:
        raise ConfigError(f"Cannot read seed file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigError(f"Seed file {path} must contain a list of tasks")

    tasks = []
    for position, raw in enumerate(data, start=1):
        if not isinstance(raw, dict):
            raise ConfigError(f"Entry {position} in {path} is not a mapping")
        try:
            tasks.append(Task.from_dict(raw, defaults))
        except ValueError as e:
            raise ConfigError(f"Entry {position} in {path}: {e}") from e
    return tasks
