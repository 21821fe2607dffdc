"""Utility helpers for todo board."""

from todo_board.utils.logger import setup_logger

__all__ = ["setup_logger"]
