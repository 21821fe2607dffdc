"""Configuration management for todo board.

Configuration Precedence (highest to lowest):
    1. Command-line flags (applied with ``AppConfig.with_overrides``)
    2. Environment variables (a ``.env`` file is loaded if present)
    3. YAML config file passed with ``--config``
    4. Default values

Environment Variables:
    TODO_BOARD_DEFAULT_TITLE: Title for tasks added without one
    TODO_BOARD_DEFAULT_PRIORITY: low, medium or high (default: medium)
    TODO_BOARD_DEFAULT_CATEGORY: Category for new tasks (default: general)
    TODO_BOARD_SAMPLE_DATA: Start with the demo board (default: true)
    TODO_BOARD_SEED_FILE: YAML file with the initial task list
    TODO_BOARD_LOG_LEVEL: Logging level name (default: WARNING)
    TODO_BOARD_LOG_DIR: Directory for log files (default: no file logging)

Example YAML file:
    default_category: work
    sample_data: false
    log_level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from todo_board.exceptions import ConfigError
from todo_board.models import Priority, TaskDefaults, parse_bool

ENV_PREFIX = "TODO_BOARD_"


@dataclass(frozen=True)
class AppConfig:
    """Immutable application settings.

    Attributes:
        default_title: Title used when a task is added without one.
        default_priority: Priority used when none is given.
        default_category: Category used when none is given.
        sample_data: Seed the board with the demo tasks.
        seed_file: YAML task list to seed from (takes precedence over samples).
        log_level: Logging level name.
        log_dir: Directory for log files; None disables file logging.
    """

    default_title: str = "Untitled Task"
    default_priority: str = Priority.MEDIUM.value
    default_category: str = "general"
    sample_data: bool = True
    seed_file: Optional[Path] = None
    log_level: str = "WARNING"
    log_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.default_title.strip():
            raise ConfigError("default_title cannot be empty")
        if not self.default_category.strip():
            raise ConfigError("default_category cannot be empty")
        try:
            priority = Priority.from_string(self.default_priority)
        except ValueError as e:
            raise ConfigError(str(e)) from e
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "default_priority", priority.value)

        level = self.log_level.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ConfigError(f"Invalid log_level: {self.log_level}")
        object.__setattr__(self, "log_level", level)

    @property
    def level(self) -> int:
        """Numeric logging level."""
        return logging.getLevelName(self.log_level)

    @property
    def task_defaults(self) -> TaskDefaults:
        return TaskDefaults(
            title=self.default_title,
            priority=self.default_priority,
            category=self.default_category,
        )

    def with_overrides(self, **kwargs: Any) -> AppConfig:
        """Create a new configuration with the given (non-None) overrides."""
        values = asdict(self)
        values.update({k: v for k, v in kwargs.items() if v is not None})
        return AppConfig(**values)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Build settings from defaults, an optional YAML file and the environment.

    Raises:
        ConfigError: If the file cannot be read or a value is invalid.
    """
    load_dotenv(override=False)

    values: dict[str, Any] = {}
    if path is not None:
        values.update(_read_yaml(Path(path)))
    values.update(_read_env())
    return AppConfig(**{key: _coerce(key, raw) for key, raw in values.items()})


def _field_names() -> set[str]:
    return {f.name for f in fields(AppConfig)}


def _read_yaml(path: Path) -> dict[str, Any]:
    """Load the YAML settings mapping."""
    try:
        with path.open(encoding="utf-8") as fp:
            data = yaml.safe_load(fp)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    unknown = sorted(set(data) - _field_names())
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")
    return data


def _read_env() -> dict[str, str]:
    values = {}
    for name in _field_names():
        raw = os.environ.get(ENV_PREFIX + name.upper())
        if raw is not None and raw != "":
            values[name] = raw
    return values


def _coerce(key: str, raw: Any) -> Any:
    """Convert a raw YAML or environment value to the field's type."""
    if key == "sample_data":
        try:
            return parse_bool(raw)
        except ValueError:
            raise ConfigError(f"Invalid boolean for {key}: {raw!r}")
    if key in ("seed_file", "log_dir"):
        return Path(str(raw)).expanduser() if raw else None
    return str(raw)
