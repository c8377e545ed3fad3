"""Session-scoped ownership of the checkpoint stack."""

from __future__ import annotations

from undo_mcp.config import TrackerConfig
from undo_mcp.core import get_logger
from undo_mcp.undo import ChangeTracker, SnapshotStore

logger = get_logger("mcp.session")


class UndoSession:
    """One agent session's checkpoint state.

    Created when the server starts and passed by reference to every
    tool handler. Closing the session clears the stack.

    Attributes:
        tracker: The session's checkpoint stack.
    """

    def __init__(self, tracker: ChangeTracker | None = None) -> None:
        self.tracker = tracker if tracker is not None else ChangeTracker()
        self._closed = False

    @classmethod
    def from_config(cls, config: TrackerConfig) -> UndoSession:
        """Build a session whose tracker follows the tracker settings."""
        store = SnapshotStore(
            encoding=config.encoding,
            max_file_size=config.max_file_size_bytes,
        )
        return cls(
            ChangeTracker(store=store, default_description=config.default_description)
        )

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """End the session and drop all checkpoints."""
        if self._closed:
            return
        self.tracker.cleanup()
        self._closed = True
        logger.debug("Undo session closed")
