"""Logging configuration for todo board."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(
    name: str = "todo_board",
    log_dir: Path | None = None,
    level: int = logging.WARNING,
) -> logging.Logger:
    """Configure the board's package logger.

    Modules log through ``logging.getLogger(__name__)``, so configuring the
    ``todo_board`` logger once in ``cli.main`` covers the manager, UI and
    config loading. The console handler writes to stderr so log lines never
    interleave with the board printed on stdout. Calling this again (after
    the config has been read) replaces the earlier handlers.

    Args:
        name: Logger name
        log_dir: Directory for ``<name>_YYYYMMDD.log`` files (none when None)
        level: Logging level

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{name}_{datetime.now():%Y%m%d}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
