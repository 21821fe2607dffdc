"""Display formatting for the console board."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from datetime import datetime
from typing import Optional, TextIO

from tabulate import tabulate

from todo_board.models import Task
from todo_board.ui import Filter, StatsView, TaskView


def format_tasks_table(tasks: Sequence[TaskView], empty_message: Optional[str] = None) -> str:
    """Format task views as a table string."""
    if not tasks:
        return empty_message or ""

    headers = ["ID", "Title", "Done", "Priority", "Category", "Action"]
    rows = [
        [
            task.id,
            _truncate(task.title, 40),
            "✓" if task.completed else "",
            task.priority,
            _truncate(task.category, 15),
            task.action_label,
        ]
        for task in tasks
    ]
    return tabulate(rows, headers=headers, tablefmt="simple")


def format_stats(stats: StatsView) -> str:
    """Format the statistics grid and priority breakdown."""
    grid = tabulate(
        [[stats.total, stats.completed, stats.pending, f"{stats.completion_rate}%"]],
        headers=["Total Tasks", "Completed", "Pending", "Completion Rate"],
        tablefmt="simple",
    )
    priorities = " | ".join(f"{name}: {count}" for name, count in stats.priority_breakdown)
    categories = " | ".join(f"{name}: {count}" for name, count in stats.category_breakdown)
    return (
        f"{grid}\n"
        f"Priority breakdown: {priorities or '(none)'}\n"
        f"Category breakdown: {categories or '(none)'}"
    )


def format_filter_bar(active: Filter) -> str:
    """Format the filter controls with the active one bracketed."""
    return "Filter: " + " ".join(
        f"[{f.value}]" if f is active else f.value for f in Filter
    )


def format_task_detail(task: Task) -> str:
    """Format a single task with full details."""
    done = "Yes" if task.completed else "No"

    return f"""
Task #{task.id}
{"─" * 40}
Title:       {task.title}
Priority:    {task.priority}
Category:    {task.category}
Completed:   {done}
Created:     {_format_date(task.created_at)}
""".strip()


class ConsoleSurface:
    """Render surface that prints the board to a text stream."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def _write(self, text: str) -> None:
        print(text, file=self._stream)

    def show_tasks(self, tasks: Sequence[TaskView], empty_message: Optional[str]) -> None:
        self._write("")
        self._write(format_tasks_table(tasks, empty_message))

    def show_stats(self, stats: StatsView) -> None:
        self._write("")
        self._write(format_stats(stats))

    def mark_active_filter(self, active: Filter) -> None:
        self._write(format_filter_bar(active))


def _truncate(text: str, max_len: int) -> str:
    """Truncate text with ellipsis if too long."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + "…"


def _format_date(dt: datetime) -> str:
    """Format datetime for display."""
    return dt.strftime("%Y-%m-%d %H:%M")
