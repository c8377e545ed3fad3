"""MCP stdio server exposing the checkpoint tools."""

from __future__ import annotations

from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from undo_mcp.config import UndoMCPConfig
from undo_mcp.core import get_logger
from undo_mcp.mcp.session import UndoSession
from undo_mcp.mcp.tools import HANDLERS, TOOLS

logger = get_logger("mcp.server")


class UndoMCPServer:
    """MCP server that serves one undo session over stdio.

    Attributes:
        config: Loaded configuration.
        session: Session owning the checkpoint stack.
        server: Underlying MCP server.
    """

    def __init__(
        self,
        config: UndoMCPConfig | None = None,
        session: UndoSession | None = None,
    ) -> None:
        self.config = config if config is not None else UndoMCPConfig()
        self.session = (
            session if session is not None else UndoSession.from_config(self.config.tracker)
        )
        self.server: Server = Server(self.config.server.name)
        self._register_handlers()

    def _register_handlers(self) -> None:
        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return TOOLS

        # Argument checks live in the handlers so clients get their messages.
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
            return [TextContent(type="text", text=self.dispatch(name, arguments or {}))]

    def dispatch(self, name: str, arguments: dict[str, Any]) -> str:
        """Run one tool call and render its text response.

        Errors are returned as ``Error: ...`` text, never raised.
        """
        handler = HANDLERS.get(name)
        if handler is None:
            logger.warning("Unknown tool requested: %s", name)
            return f"Error: Unknown tool: {name}"

        try:
            return handler(self.session, arguments)
        except Exception as e:
            logger.warning("Tool %s failed: %s", name, e)
            return f"Error: {e}"

    async def run(self) -> None:
        """Serve requests on stdin/stdout until the client disconnects."""
        logger.info("Undo MCP server running on stdio")
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            self.session.close()
