"""Checkpoint stack with undo and lazy deduplication.

This module provides the ChangeTracker class that owns the stack of
checkpoints for one agent session.

Example:
    from undo_mcp.undo.tracker import ChangeTracker

    tracker = ChangeTracker()

    # Before modifying files, checkpoint them
    tracker.create_checkpoint(["/path/to/file.py"], "Edit file.py")

    # Later, revert the most recent checkpoint
    result = tracker.undo()
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

from undo_mcp.core import CheckpointError, get_logger
from undo_mcp.undo.models import Checkpoint, TrackerStatus, UndoResult
from undo_mcp.undo.snapshot import SnapshotStore

logger = get_logger("undo.tracker")

DEFAULT_DESCRIPTION = "Manual checkpoint"
EMPTY_STACK_MESSAGE = "No checkpoints to undo"
EMPTY_LIST_PLACEHOLDER = "No undo checkpoints available"


def format_age(timestamp: datetime, now: datetime | None = None) -> str:
    """Format the time since ``timestamp`` as a short relative age.

    Args:
        timestamp: Aware datetime to measure from.
        now: Reference instant. Defaults to the current UTC time.

    Returns:
        A string like ``"42s ago"``, ``"5m ago"``, ``"3h ago"`` or ``"2d ago"``.
    """
    now = now or datetime.now(UTC)
    seconds = max(0, int((now - timestamp).total_seconds()))

    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


class ChangeTracker:
    """LIFO stack of checkpoints for one agent session.

    The stack is deduplicated immediately before every read and before
    undo consumes its tail, never on push. Deduplication drops
    checkpoints that already match the files on disk and checkpoints
    whose content duplicates an earlier surviving one.

    Attributes:
        store: Snapshot store used to capture and restore files.
        default_description: Label for checkpoints created without one.
    """

    def __init__(
        self,
        store: SnapshotStore | None = None,
        default_description: str = DEFAULT_DESCRIPTION,
    ) -> None:
        self.store = store if store is not None else SnapshotStore()
        self.default_description = default_description
        self._stack: list[Checkpoint] = []

    def __len__(self) -> int:
        """Raw stack size, without deduplication."""
        return len(self._stack)

    def create_checkpoint(
        self,
        paths: Sequence[str],
        description: str | None = None,
    ) -> Checkpoint:
        """Capture the given paths and push a checkpoint.

        Args:
            paths: Files that are about to be modified, created or deleted.
            description: Label of the planned change.

        Returns:
            The pushed checkpoint.

        Raises:
            CheckpointError: If ``paths`` is empty or a single string.
            CaptureError: If an existing file cannot be read. Nothing is pushed.
        """
        if isinstance(paths, str):
            raise CheckpointError("Files array must be a list of paths, not a string")
        if not paths:
            raise CheckpointError("Files array is required")

        description = description or self.default_description
        logger.debug("Creating checkpoint: %s", description)
        logger.debug("Files to checkpoint: %s", ", ".join(paths))

        fragment = self.store.capture(paths)
        checkpoint = Checkpoint.from_fragment(fragment, description)
        self._stack.append(checkpoint)

        logger.info(
            "Checkpoint created: %s (%d files). Stack size: %d",
            description,
            checkpoint.file_count,
            len(self._stack),
        )
        return checkpoint

    def undo(self) -> UndoResult:
        """Pop the most recent surviving checkpoint and restore it.

        If any path fails to restore, the checkpoint is pushed back so
        the stack never loses a checkpoint that was not fully applied.

        Returns:
            UndoResult describing the outcome.
        """
        try:
            self.deduplicate()
        except Exception as e:
            logger.exception("Deduplication failed before undo")
            return UndoResult(success=False, message=f"Failed to restore checkpoint: {e}")

        if not self._stack:
            return UndoResult(success=False, message=EMPTY_STACK_MESSAGE)

        checkpoint = self._stack.pop()
        logger.debug("Starting undo for checkpoint: %s", checkpoint.description)
        logger.debug("Files to restore: %s", ", ".join(checkpoint.paths))

        try:
            result = self.store.restore(checkpoint)
        except Exception as e:
            self._stack.append(checkpoint)
            logger.exception("Undo failed for checkpoint: %s", checkpoint.description)
            return UndoResult(success=False, message=f"Failed to restore checkpoint: {e}")

        if not result.success:
            self._stack.append(checkpoint)
            logger.warning(
                "Undo of %s incomplete, checkpoint kept: %s",
                checkpoint.description,
                "; ".join(result.errors),
            )
            return UndoResult(
                success=False,
                message=f"Some files failed to restore: {'; '.join(result.errors)}",
            )

        logger.info(
            "Undone: %s (%d files touched)", checkpoint.description, len(result.restored)
        )
        return UndoResult(
            success=True,
            restored_files=[f.label for f in result.restored],
            description=checkpoint.description,
        )

    def list_undo_stack(self) -> list[str]:
        """Describe each surviving checkpoint, oldest first.

        Returns:
            One formatted block per checkpoint, or a single placeholder
            entry when the stack is empty.
        """
        self.deduplicate()

        if not self._stack:
            return [EMPTY_LIST_PLACEHOLDER]

        now = datetime.now(UTC)
        return [
            self._format_entry(index, checkpoint, now)
            for index, checkpoint in enumerate(self._stack, start=1)
        ]

    def get_status(self) -> TrackerStatus:
        """Get the post-deduplication checkpoint count."""
        self.deduplicate()
        count = len(self._stack)
        return TrackerStatus(checkpoint_count=count, can_undo=count > 0)

    def cleanup(self) -> None:
        """Drop every checkpoint."""
        self._stack.clear()
        logger.info("All checkpoints cleared")

    def deduplicate(self) -> int:
        """Remove redundant checkpoints from the stack.

        Walks oldest to newest. A checkpoint is dropped when restoring
        it would change nothing on disk, or when an earlier surviving
        checkpoint has identical content. Survivors keep their order.

        Note:
            Reads every tracked file on each call, so the cost grows with
            checkpoints times files.

        Returns:
            Number of checkpoints removed.
        """
        if not self._stack:
            return 0

        logger.debug("Starting deduplication of %d checkpoints", len(self._stack))

        kept: list[Checkpoint] = []
        for checkpoint in self._stack:
            if self.store.matches_disk(checkpoint):
                logger.debug(
                    "Checkpoint %r matches current file state - removing",
                    checkpoint.description,
                )
                continue

            if any(checkpoint.has_same_content(existing) for existing in kept):
                logger.debug(
                    "Checkpoint %r is duplicate - removing", checkpoint.description
                )
                continue

            kept.append(checkpoint)

        removed = len(self._stack) - len(kept)
        self._stack = kept

        if removed:
            logger.debug(
                "Deduplicated %d checkpoints. Stack size: %d", removed, len(kept)
            )
        return removed

    def _format_entry(self, index: int, checkpoint: Checkpoint, now: datetime) -> str:
        modified = list(checkpoint.modified_files)
        created = sorted(checkpoint.created_files)

        lines = [
            f"[{index}] {checkpoint.description}",
            f"    Created: {format_age(checkpoint.timestamp, now)} | "
            f"Files: {checkpoint.file_count} "
            f"({len(modified)} modified, {len(created)} created)",
        ]
        if modified:
            lines.append("    Modified:")
            lines.extend(f"      - {path}" for path in modified)
        if created:
            lines.append("    Created:")
            lines.extend(f"      - {path}" for path in created)

        return "\n".join(lines)
