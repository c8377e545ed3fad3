"""Shared test fixtures for undo-mcp tests.

Fixture Dependency Hierarchy
============================

::

    temp_dir (base temporary directory)
    ├── temp_home (isolated HOME)
    └── temp_project (isolated project directory)
        ├── sample_file (notes.txt)
        └── tracker
            └── session

    clean_environ (UNDO_MCP_* variables removed)
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from undo_mcp.mcp.session import UndoSession
from undo_mcp.undo import ChangeTracker


# ============================================================
# Directory Fixtures
# ============================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests.

    Yields:
        Path to temporary directory that is cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary home directory and point HOME at it."""
    home = temp_dir / "home"
    home.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


@pytest.fixture
def temp_project(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temporary project directory and chdir into it."""
    project = temp_dir / "project"
    project.mkdir(parents=True)
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def clean_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove UNDO_MCP_* variables so host settings don't leak into tests."""
    import os

    for key in list(os.environ):
        if key.startswith("UNDO_MCP_"):
            monkeypatch.delenv(key, raising=False)


# ============================================================
# File Fixtures
# ============================================================


@pytest.fixture
def sample_file(temp_project: Path) -> Path:
    """Create a small text file in the project directory."""
    file_path = temp_project / "notes.txt"
    file_path.write_text("first line\nsecond line\n")
    return file_path


# ============================================================
# Tracker Fixtures
# ============================================================


@pytest.fixture
def tracker() -> ChangeTracker:
    """Fresh checkpoint tracker with default settings."""
    return ChangeTracker()


@pytest.fixture
def session(tracker: ChangeTracker) -> Generator[UndoSession, None, None]:
    """Undo session around the tracker fixture, closed after the test."""
    undo_session = UndoSession(tracker)
    yield undo_session
    undo_session.close()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Clear handlers installed on the undo-mcp logger by a test."""
    yield
    logger = logging.getLogger("undo-mcp")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
