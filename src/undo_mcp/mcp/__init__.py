"""MCP transport for the checkpoint tracker."""

from undo_mcp.mcp.server import UndoMCPServer
from undo_mcp.mcp.session import UndoSession
from undo_mcp.mcp.tools import HANDLERS, TOOLS

__all__ = ["HANDLERS", "TOOLS", "UndoMCPServer", "UndoSession"]
