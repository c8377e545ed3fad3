"""Exception hierarchy for undo-mcp."""

from __future__ import annotations


class UndoMCPError(Exception):
    """Base class for all undo-mcp errors."""


class ConfigError(UndoMCPError):
    """Configuration could not be loaded or validated."""


class CheckpointError(UndoMCPError):
    """A checkpoint could not be created."""


class CaptureError(CheckpointError):
    """An existing file could not be captured into a checkpoint.

    Attributes:
        path: Path that failed to capture.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot capture {path}: {reason}")
