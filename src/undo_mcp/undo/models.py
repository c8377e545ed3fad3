"""Checkpoint data models.

This module provides the data models for the checkpoint/undo stack:
- Checkpoint: immutable record of file state before one planned mutation
- RestoreResult: per-path outcome of applying a checkpoint to disk
- UndoResult: structured outcome of an undo call
- TrackerStatus: post-deduplication stack summary

Example:
    store = SnapshotStore()
    fragment = store.capture(["/path/to/file.py"])
    checkpoint = Checkpoint.from_fragment(fragment, "Edit file.py")
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from types import MappingProxyType


class RestoreAction(str, Enum):
    """How a single path was put back during restore."""

    RESTORED = "restored"
    RESTORED_FROM_DELETION = "restored_from_deletion"
    DELETED = "deleted"


@dataclass(frozen=True)
class CheckpointFragment:
    """File maps produced by a capture, before they get a label.

    Attributes:
        modified_files: Path to captured content for files that existed.
        created_files: Paths that did not exist at capture time.
    """

    modified_files: Mapping[str, str]
    created_files: frozenset[str]


@dataclass(frozen=True)
class Checkpoint:
    """State of a set of files immediately before one planned mutation.

    A path appears in at most one of ``modified_files`` and
    ``created_files``. Checkpoints are never mutated once pushed.

    Attributes:
        modified_files: Path to exact content captured at checkpoint time.
        created_files: Paths that did not exist; undo deletes them.
        description: Label of the action this checkpoint guards.
        timestamp: Creation instant, only used for display.
    """

    modified_files: Mapping[str, str]
    created_files: frozenset[str]
    description: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        overlap = set(self.modified_files) & self.created_files
        if overlap:
            raise ValueError(
                f"Paths cannot be both modified and created: {sorted(overlap)}"
            )
        # Freeze the mapping so the checkpoint owns its content by value
        object.__setattr__(
            self, "modified_files", MappingProxyType(dict(self.modified_files))
        )
        object.__setattr__(self, "created_files", frozenset(self.created_files))

    @classmethod
    def from_fragment(
        cls, fragment: CheckpointFragment, description: str
    ) -> Checkpoint:
        """Label a captured fragment as a checkpoint."""
        return cls(
            modified_files=fragment.modified_files,
            created_files=fragment.created_files,
            description=description,
        )

    @property
    def paths(self) -> list[str]:
        """All tracked paths, modified first."""
        return [*self.modified_files, *sorted(self.created_files)]

    @property
    def file_count(self) -> int:
        """Number of tracked paths."""
        return len(self.modified_files) + len(self.created_files)

    def has_same_content(self, other: Checkpoint) -> bool:
        """Check whether two checkpoints would restore the same state.

        Descriptions and timestamps are ignored. Created paths are
        compared as sets.
        """
        if len(self.modified_files) != len(other.modified_files):
            return False
        if len(self.created_files) != len(other.created_files):
            return False

        for path, content in self.modified_files.items():
            if other.modified_files.get(path) != content:
                return False

        return self.created_files == other.created_files


@dataclass(frozen=True)
class RestoredFile:
    """A path touched by a successful per-path restore."""

    path: str
    action: RestoreAction

    @property
    def label(self) -> str:
        """Path annotated with how it was restored."""
        if self.action is RestoreAction.RESTORED_FROM_DELETION:
            return f"{self.path} (restored from deletion)"
        if self.action is RestoreAction.DELETED:
            return f"{self.path} (deleted, was created)"
        return self.path


@dataclass
class RestoreResult:
    """Outcome of applying a checkpoint back to disk.

    Attributes:
        restored: Paths successfully touched, in restore order.
        errors: One message per path that failed.
    """

    restored: list[RestoredFile] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True when no path failed."""
        return not self.errors


@dataclass(frozen=True)
class UndoResult:
    """Structured result of an undo call. Undo never raises."""

    success: bool
    message: str | None = None
    restored_files: list[str] | None = None
    description: str | None = None


@dataclass(frozen=True)
class TrackerStatus:
    """Stack summary taken after deduplication."""

    checkpoint_count: int
    can_undo: bool
