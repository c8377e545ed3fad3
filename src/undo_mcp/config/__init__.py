"""Configuration package for undo-mcp."""

from undo_mcp.config.loader import ConfigLoader
from undo_mcp.config.models import (
    LoggingConfig,
    ServerConfig,
    TrackerConfig,
    UndoMCPConfig,
)

__all__ = [
    "ConfigLoader",
    "LoggingConfig",
    "ServerConfig",
    "TrackerConfig",
    "UndoMCPConfig",
]
