"""Tool definitions and handlers exposed over MCP.

Each handler takes the session and the raw tool arguments and returns
the text shown to the agent. Handlers may raise; the server renders
exceptions as error text.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from mcp.types import Tool

from undo_mcp.core import CheckpointError
from undo_mcp.mcp.session import UndoSession

ToolHandler = Callable[[UndoSession, dict[str, Any]], str]

_EMPTY_SCHEMA: dict[str, Any] = {"type": "object", "properties": {}}

TOOLS: list[Tool] = [
    Tool(
        name="checkpoint",
        description=(
            "MANDATORY: ALWAYS call this function FIRST before making ANY file "
            "modifications, deletions, or creations. This creates a checkpoint "
            "to enable undo functionality. Files that do not exist yet are "
            "recorded so that undo deletes them."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "files": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "File paths that will be modified, created, or deleted",
                },
                "description": {
                    "type": "string",
                    "description": "Concise, action-focused description of the next change",
                    "default": "Manual checkpoint",
                },
            },
            "required": ["files"],
        },
    ),
    Tool(
        name="undo",
        description=(
            "Undo the last checkpoint (pops from stack and restores files). "
            "To undo multiple changes, call this repeatedly."
        ),
        inputSchema=_EMPTY_SCHEMA,
    ),
    Tool(
        name="list_undos",
        description="List all undo checkpoints in the stack",
        inputSchema=_EMPTY_SCHEMA,
    ),
    Tool(
        name="cleanup",
        description="Clear all undo checkpoints from the stack",
        inputSchema=_EMPTY_SCHEMA,
    ),
    Tool(
        name="status",
        description="Get current status of the undo system (checkpoint count and whether undo is possible)",
        inputSchema=_EMPTY_SCHEMA,
    ),
]


def _bullets(items: list[str]) -> str:
    return "\n".join(f"  - {item}" for item in items)


def handle_checkpoint(session: UndoSession, arguments: dict[str, Any]) -> str:
    files = arguments.get("files")
    if not files or not isinstance(files, list):
        raise CheckpointError("Files array is required")
    if not all(isinstance(f, str) for f in files):
        raise CheckpointError("Files array must contain only strings")

    description = arguments.get("description") or None
    checkpoint = session.tracker.create_checkpoint(files, description)
    return (
        f'✅ Checkpoint created: "{checkpoint.description}"\n'
        f"Files captured: {len(files)}\n"
        f"{_bullets(files)}"
    )


def handle_undo(session: UndoSession, arguments: dict[str, Any]) -> str:
    result = session.tracker.undo()
    if not result.success:
        return result.message or "Failed to undo"
    return (
        f'✅ Undone: "{result.description}"\n'
        f"Restored files:\n"
        f"{_bullets(result.restored_files or [])}"
    )


def handle_list_undos(session: UndoSession, arguments: dict[str, Any]) -> str:
    entries = session.tracker.list_undo_stack()
    return "Undo Stack:\n" + "\n\n".join(entries)


def handle_cleanup(session: UndoSession, arguments: dict[str, Any]) -> str:
    session.tracker.cleanup()
    return "✅ All undo checkpoints cleared"


def handle_status(session: UndoSession, arguments: dict[str, Any]) -> str:
    status = session.tracker.get_status()
    return (
        "📊 Undo System Status:\n"
        f"Checkpoints: {status.checkpoint_count}\n"
        f"Can Undo: {str(status.can_undo).lower()}"
    )


HANDLERS: dict[str, ToolHandler] = {
    "checkpoint": handle_checkpoint,
    "undo": handle_undo,
    "list_undos": handle_list_undos,
    "cleanup": handle_cleanup,
    "status": handle_status,
}
