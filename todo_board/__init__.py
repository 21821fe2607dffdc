"""Todo Board - an in-memory task list with a console board."""

from todo_board.manager import TaskManager
from todo_board.models import Priority, Task, TaskDefaults, TaskStats
from todo_board.ui import Filter, TaskAction, TodoUI

__all__ = [
    "Filter",
    "Priority",
    "Task",
    "TaskAction",
    "TaskDefaults",
    "TaskManager",
    "TaskStats",
    "TodoUI",
]
