"""Command-line interface for undo-mcp."""

from undo_mcp.cli.main import main

__all__ = ["main"]
