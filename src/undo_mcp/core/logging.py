"""Logging infrastructure for undo-mcp.

Console output always goes to stderr: stdout carries the MCP stdio
stream and must not receive anything but protocol messages.
"""

from __future__ import annotations

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "undo-mcp"

# Log level mapping for environment variable
LOG_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Log file settings
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB per file
BACKUP_COUNT = 5

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_log_level_from_env() -> int:
    """Get logging level from UNDO_MCP_LOG_LEVEL environment variable.

    Returns:
        Logging level constant. Defaults to WARNING if not set or invalid.
    """
    level_str = os.environ.get("UNDO_MCP_LOG_LEVEL", "WARNING").upper()
    return LOG_LEVEL_MAP.get(level_str, logging.WARNING)


def setup_logging(
    level: int | None = None,
    log_file: Path | None = None,
    console_output: bool = True,
    rich_console: bool = True,
    file_logging: bool = False,
) -> None:
    """Configure logging for undo-mcp.

    Logging is configured based on:
    1. Explicit level parameter (highest priority)
    2. UNDO_MCP_LOG_LEVEL environment variable
    3. Default level (WARNING)

    Args:
        level: Logging level. If None, uses env var or default (WARNING).
        log_file: File path for log output. Enables file logging when given.
        console_output: Show logs on stderr (default: True).
        rich_console: Use Rich for console formatting (default: True).
        file_logging: Write logs to file (default: False).
    """
    handlers: list[logging.Handler] = []

    if level is None:
        level = get_log_level_from_env()

    if log_file is not None:
        file_logging = True

    if file_logging and log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=MAX_LOG_SIZE,
            backupCount=BACKUP_COUNT,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        # File handler always logs at DEBUG level to capture everything
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    if console_output:
        if rich_console:
            console_handler: logging.Handler = RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_time=True,
                show_path=False,
                level=level,
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
            console_handler.setLevel(level)
        handlers.append(console_handler)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG if file_logging else level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    for handler in handlers:
        root_logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: The name for the logger (will be prefixed with 'undo-mcp.').

    Returns:
        A configured Logger instance.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
