"""Capture and restore of file content for checkpoints."""

from __future__ import annotations

import os
from collections.abc import Iterable

from undo_mcp.core import CaptureError, get_logger
from undo_mcp.undo.models import (
    Checkpoint,
    CheckpointFragment,
    RestoreAction,
    RestoredFile,
    RestoreResult,
)

logger = get_logger("undo.snapshot")

DEFAULT_MAX_FILE_SIZE = 1_048_576  # 1MB


class SnapshotStore:
    """Reads files into checkpoints and writes checkpoints back to disk.

    Files are handled as text in one fixed encoding. Newlines are read
    and written untranslated so captured content round-trips exactly.

    Attributes:
        encoding: Text encoding for all reads and writes.
        max_file_size: Largest existing file that can be captured, in bytes.
    """

    def __init__(
        self,
        encoding: str = "utf-8",
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        self.encoding = encoding
        self.max_file_size = max_file_size

    def read(self, path: str) -> str:
        """Read a file's full content as text.

        Raises:
            OSError: If the file cannot be opened or read.
            UnicodeDecodeError: If the content is not valid in the encoding.
        """
        with open(path, encoding=self.encoding, newline="") as f:
            return f.read()

    def write(self, path: str, content: str) -> None:
        """Write text content, replacing the file."""
        with open(path, "w", encoding=self.encoding, newline="") as f:
            f.write(content)

    def capture(self, paths: Iterable[str]) -> CheckpointFragment:
        """Capture the current state of each path.

        Existing files are read into ``modified_files``; missing paths go
        into ``created_files``. A symlink whose target is missing counts as
        missing. Nothing is returned unless every existing file was read.

        Args:
            paths: File paths to capture. Normalized to absolute paths.

        Returns:
            The captured file maps.

        Raises:
            CaptureError: If any existing path cannot be captured.
        """
        modified: dict[str, str] = {}
        created: set[str] = set()

        for raw_path in paths:
            path = os.path.abspath(raw_path)
            if path in modified or path in created:
                continue

            if not os.path.exists(path):
                created.add(path)
                logger.debug("Recorded %s as to-be-created", path)
                continue

            if not os.path.isfile(path):
                raise CaptureError(path, "not a regular file")

            try:
                size = os.path.getsize(path)
                if size > self.max_file_size:
                    raise CaptureError(
                        path, f"file too large ({size} bytes > {self.max_file_size})"
                    )
                content = self.read(path)
            except UnicodeDecodeError as e:
                raise CaptureError(path, f"not valid {self.encoding} text") from e
            except PermissionError as e:
                raise CaptureError(path, "permission denied") from e
            except OSError as e:
                raise CaptureError(path, str(e)) from e

            modified[path] = content
            logger.debug("Captured content for %s: %d characters", path, len(content))

        return CheckpointFragment(
            modified_files=modified,
            created_files=frozenset(created),
        )

    def restore(self, checkpoint: Checkpoint) -> RestoreResult:
        """Apply a checkpoint back to disk.

        Modified files are rewritten with their captured content,
        recreating them along with missing parent directories if they
        were deleted. Created files are removed if present. Each path is
        attempted independently; failures are collected, not raised.

        Args:
            checkpoint: Checkpoint to apply.

        Returns:
            RestoreResult with touched paths and per-path errors.
        """
        result = RestoreResult()

        for path, content in checkpoint.modified_files.items():
            try:
                action = RestoreAction.RESTORED
                if not os.path.lexists(path):
                    action = RestoreAction.RESTORED_FROM_DELETION
                    parent = os.path.dirname(path)
                    if parent:
                        os.makedirs(parent, exist_ok=True)

                self.write(path, content)
                result.restored.append(RestoredFile(path, action))
                logger.debug("Restored %s (%s)", path, action.value)
            except PermissionError:
                result.errors.append(f"Permission denied: {path}")
            except OSError as e:
                result.errors.append(f"Failed to restore {path}: {e}")

        for path in sorted(checkpoint.created_files):
            try:
                if not os.path.exists(path):
                    logger.debug("Created file already absent: %s", path)
                    continue

                os.remove(path)
                result.restored.append(RestoredFile(path, RestoreAction.DELETED))
                logger.debug("Deleted created file %s", path)
            except PermissionError:
                result.errors.append(f"Permission denied: {path}")
            except OSError as e:
                result.errors.append(f"Failed to delete {path}: {e}")

        return result

    def matches_disk(self, checkpoint: Checkpoint) -> bool:
        """Check whether restoring a checkpoint would change nothing.

        True when every modified file exists with identical content and
        every created file is absent. Unreadable files never match.
        """
        for path in checkpoint.created_files:
            if os.path.exists(path):
                return False

        for path, content in checkpoint.modified_files.items():
            if not os.path.isfile(path):
                return False
            try:
                if self.read(path) != content:
                    return False
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Cannot compare %s with disk: %s", path, e)
                return False

        return True
