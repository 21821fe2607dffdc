"""Custom exceptions for todo board."""

from __future__ import annotations


class TodoBoardError(Exception):
    """Base exception for all todo board errors."""


class ConfigError(TodoBoardError):
    """Configuration errors (invalid settings, unreadable seed files)."""


class CommandError(TodoBoardError):
    """Shell input that could not be parsed into a command."""
