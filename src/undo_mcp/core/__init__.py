"""Core package containing errors and logging."""

from undo_mcp.core.errors import (
    CaptureError,
    CheckpointError,
    ConfigError,
    UndoMCPError,
)
from undo_mcp.core.logging import get_logger, setup_logging

__all__ = [
    "CaptureError",
    "CheckpointError",
    "ConfigError",
    "UndoMCPError",
    "get_logger",
    "setup_logging",
]
