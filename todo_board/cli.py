"""Command-line interface for todo board."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from pathlib import Path
from typing import Callable, NoReturn, Optional, Sequence, TextIO

from todo_board.config import AppConfig, load_config
from todo_board.display import ConsoleSurface, format_task_detail, format_tasks_table
from todo_board.exceptions import CommandError, ConfigError
from todo_board.manager import TaskManager
from todo_board.models import Priority
from todo_board.seed import load_seed_file, sample_tasks
from todo_board.ui import EMPTY_MESSAGE, Filter, StatsView, TaskAction, TaskView, TodoUI
from todo_board.utils.logger import setup_logger

logger = logging.getLogger(__name__)

PROMPT = "todo> "

COMMAND_ALIASES = {"rm": "delete", "exit": "quit"}


def parse_priority(value: str) -> Priority:
    """Parse priority from string."""
    try:
        return Priority.from_string(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_task_id(value: str) -> int:
    """Parse a task id, tolerating a trailing dot ("3.")."""
    raw = value.rstrip(".")
    if not raw.isdigit():
        raise argparse.ArgumentTypeError(f"Invalid task id: '{value}'")
    return int(raw)


def create_parser() -> argparse.ArgumentParser:
    """Create the program argument parser."""
    parser = argparse.ArgumentParser(
        prog="todo_board",
        description="An in-memory todo board for the terminal.",
    )
    parser.add_argument("--config", type=Path, help="YAML settings file")
    parser.add_argument("--seed", type=Path, help="YAML file with the initial task list")
    parser.add_argument(
        "--no-sample", action="store_true", help="Start with an empty board"
    )
    parser.add_argument(
        "-e", "--execute", action="append", metavar="CMD",
        help="Run a board command and exit (repeatable)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


class CommandParser(argparse.ArgumentParser):
    """Argument parser for shell lines; errors raise instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise CommandError(message)

    def exit(self, status: int = 0, message: Optional[str] = None) -> NoReturn:
        raise CommandError(message or "invalid command")


def create_command_parser() -> CommandParser:
    """Create the parser for commands typed into the shell."""
    parser = CommandParser(prog="", add_help=False)
    subparsers = parser.add_subparsers(dest="command", metavar="command")

    # Add command
    add_parser = subparsers.add_parser("add", add_help=False, help="Add a task")
    add_parser.add_argument("title", nargs="+", help="Task title")
    add_parser.add_argument("-p", "--priority", type=parse_priority, help="low, medium or high")
    add_parser.add_argument("-c", "--category", help="Task category")

    # Toggle / delete
    toggle_parser = subparsers.add_parser("toggle", add_help=False, help="Toggle task completion")
    toggle_parser.add_argument("id", type=parse_task_id, help="Task ID")
    delete_parser = subparsers.add_parser(
        "delete", aliases=["rm"], add_help=False, help="Delete a task"
    )
    delete_parser.add_argument("id", type=parse_task_id, help="Task ID")

    # Update command
    update_parser = subparsers.add_parser("update", add_help=False, help="Update a task")
    update_parser.add_argument("id", type=parse_task_id, help="Task ID")
    update_parser.add_argument("-t", "--title", help="New title")
    update_parser.add_argument("-p", "--priority", type=parse_priority, help="New priority")
    update_parser.add_argument("-c", "--category", help="New category")
    done_group = update_parser.add_mutually_exclusive_group()
    done_group.add_argument("--done", dest="completed", action="store_const", const=True)
    done_group.add_argument("--undone", dest="completed", action="store_const", const=False)

    show_parser = subparsers.add_parser("show", add_help=False, help="Show task details")
    show_parser.add_argument("id", type=parse_task_id, help="Task ID")

    filter_parser = subparsers.add_parser("filter", add_help=False, help="Choose the visible tasks")
    filter_parser.add_argument("name", choices=[f.value for f in Filter], help="Filter name")

    list_parser = subparsers.add_parser("list", add_help=False, help="Redraw the board")
    list_parser.add_argument(
        "--by-priority", action="store_true", help="List all tasks, highest priority first"
    )

    subparsers.add_parser("stats", add_help=False, help="Show statistics")
    subparsers.add_parser("help", add_help=False, help="Show this help")
    subparsers.add_parser("quit", aliases=["exit"], add_help=False, help="Leave the board")

    return parser


class Shell:
    """Interactive command loop; the event source for the TodoUI."""

    def __init__(self, ui: TodoUI, surface: ConsoleSurface, stream: Optional[TextIO] = None) -> None:
        """Initialize shell with a UI and the surface it renders to."""
        self._ui = ui
        self._surface = surface
        self._stream = stream if stream is not None else sys.stdout
        self._parser = create_command_parser()

    def _print(self, text: str) -> None:
        print(text, file=self._stream)

    def run(self, read_line: Callable[[str], str] = input) -> int:
        """Read and execute commands until quit or end of input."""
        self._ui.render()
        try:
            while True:
                line = read_line(PROMPT)
                if not self.execute(line):
                    break
        except (KeyboardInterrupt, EOFError):
            self._print("")
        self._print("Goodbye.")
        return 0

    def execute(self, line: str) -> bool:
        """Execute one command line. Returns False when the shell should stop."""
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            self._print(f"Error: {e}")
            return True
        if not tokens:
            return True

        try:
            args = self._parser.parse_args(tokens)
        except CommandError as e:
            self._print(f"Error: {e}. Type 'help' for commands.")
            return True

        # argparse stores the alias that was typed
        command = COMMAND_ALIASES.get(args.command, args.command)
        if command == "quit":
            return False

        handler = getattr(self, f"_handle_{command}", None)
        if handler is None:
            self._print(f"Error: unknown command '{args.command}'")
            return True

        try:
            handler(args)
        except ValueError as e:
            self._print(f"Validation error: {e}")
        return True

    def _not_found(self, task_id: int) -> None:
        self._print(f"Task #{task_id} not found")

    def _handle_add(self, args: argparse.Namespace) -> None:
        """Handle add command."""
        task = self._ui.handle_add_task({
            "title": " ".join(args.title),
            "priority": args.priority,
            "category": args.category,
        })
        if task is not None:
            self._print(f"Created task #{task.id}: {task.title}")

    def _handle_toggle(self, args: argparse.Namespace) -> None:
        """Handle toggle command."""
        if self._ui.handle_task_action(args.id, TaskAction.TOGGLE.value) is None:
            self._not_found(args.id)

    def _handle_delete(self, args: argparse.Namespace) -> None:
        """Handle delete command."""
        if self._ui.handle_task_action(args.id, TaskAction.DELETE.value) is None:
            self._not_found(args.id)
        else:
            self._print(f"Deleted task #{args.id}")

    def _handle_update(self, args: argparse.Namespace) -> None:
        """Handle update command."""
        title = args.title.strip() if args.title is not None else None
        if title is not None and not title:
            raise ValueError("Title cannot be empty")

        task = self._ui.manager.update(
            args.id,
            title=title,
            completed=args.completed,
            priority=args.priority,
            category=args.category,
        )
        if task is None:
            self._not_found(args.id)
            return
        self._ui.render()
        self._print(f"Updated task #{task.id}")

    def _handle_show(self, args: argparse.Namespace) -> None:
        """Handle show command."""
        task = self._ui.manager.get(args.id)
        if task is None:
            self._not_found(args.id)
            return
        self._print(format_task_detail(task))

    def _handle_filter(self, args: argparse.Namespace) -> None:
        """Handle filter command."""
        self._ui.set_filter(args.name)

    def _handle_list(self, args: argparse.Namespace) -> None:
        """Handle list command."""
        if args.by_priority:
            views = [TaskView.from_task(t) for t in self._ui.manager.tasks_by_priority()]
            self._print(format_tasks_table(views, EMPTY_MESSAGE))
            return
        self._ui.render()

    def _handle_stats(self, args: argparse.Namespace) -> None:
        """Handle stats command."""
        self._surface.show_stats(StatsView.from_stats(self._ui.manager.stats()))

    def _handle_help(self, args: argparse.Namespace) -> None:
        """Handle help command."""
        self._print(self._parser.format_help())


def build_manager(config: AppConfig) -> TaskManager:
    """Create the TaskManager with the configured initial tasks."""
    defaults = config.task_defaults
    if config.seed_file is not None:
        initial = load_seed_file(config.seed_file, defaults)
    elif config.sample_data:
        initial = sample_tasks(defaults)
    else:
        initial = []

    try:
        return TaskManager(initial, defaults=defaults)
    except ValueError as e:
        raise ConfigError(str(e)) from e


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config).with_overrides(
            seed_file=args.seed,
            sample_data=False if args.no_sample else None,
            log_level="DEBUG" if args.verbose else None,
        )
    except ConfigError as e:
        setup_logger().error(f"Configuration error: {e}")
        return 1

    app_logger = setup_logger(log_dir=config.log_dir, level=config.level)

    try:
        manager = build_manager(config)
    except ConfigError as e:
        app_logger.error(f"Configuration error: {e}")
        return 1

    # Initialize components
    surface = ConsoleSurface()
    ui = TodoUI(manager, surface)
    shell = Shell(ui, surface)
    logger.info("Board ready with %d tasks", len(manager))

    if args.execute:
        for line in args.execute:
            if not shell.execute(line):
                break
        return 0

    return shell.run()
