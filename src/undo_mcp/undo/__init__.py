"""Checkpoint and undo system for agent file edits.

Example:
    from undo_mcp.undo import ChangeTracker

    tracker = ChangeTracker()
    tracker.create_checkpoint(["notes.md"], "Rewrite notes")
    # ... agent edits notes.md ...
    result = tracker.undo()
"""

from undo_mcp.undo.models import (
    Checkpoint,
    CheckpointFragment,
    RestoreAction,
    RestoredFile,
    RestoreResult,
    TrackerStatus,
    UndoResult,
)
from undo_mcp.undo.snapshot import SnapshotStore
from undo_mcp.undo.tracker import ChangeTracker, format_age

__all__ = [
    "ChangeTracker",
    "Checkpoint",
    "CheckpointFragment",
    "RestoreAction",
    "RestoreResult",
    "RestoredFile",
    "SnapshotStore",
    "TrackerStatus",
    "UndoResult",
    "format_age",
]
