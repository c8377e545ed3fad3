"""Configuration models for undo-mcp.

This module defines Pydantic models for all configuration sections,
including validation and defaults.
"""

from __future__ import annotations

import codecs
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TrackerConfig(BaseModel):
    """Checkpoint tracker configuration.

    Attributes:
        encoding: Text encoding used to read and write tracked files.
        default_description: Label used when a checkpoint has no description.
        max_file_size_kb: Largest existing file that can be captured (1-10240 KB).
    """

    model_config = ConfigDict(validate_assignment=True)

    encoding: str = "utf-8"
    default_description: str = "Manual checkpoint"
    max_file_size_kb: int = Field(default=1024, ge=1, le=10240)

    @field_validator("encoding")
    @classmethod
    def validate_encoding(cls, v: str) -> str:
        """Validate that the encoding is a codec Python knows."""
        v = v.strip()
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {v}") from e
        return v

    @field_validator("default_description")
    @classmethod
    def validate_default_description(cls, v: str) -> str:
        """Validate that the default description is non-empty."""
        if not v or not v.strip():
            raise ValueError("Default description must be a non-empty string")
        return v.strip()

    @property
    def max_file_size_bytes(self) -> int:
        """Capture size limit in bytes."""
        return self.max_file_size_kb * 1024


class ServerConfig(BaseModel):
    """MCP server configuration.

    Attributes:
        name: Server name announced during MCP initialization.
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = "undo-mcp"


class LoggingConfig(BaseModel):
    """Logging configuration.

    Attributes:
        level: Console log level name.
        file: Optional log file; enables rotating file logging when set.
    """

    model_config = ConfigDict(validate_assignment=True)

    level: str = "WARNING"
    file: Path | None = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level name."""
        v = v.strip().upper()
        if v not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {v}. Valid: {', '.join(VALID_LOG_LEVELS)}"
            )
        return v


class UndoMCPConfig(BaseModel):
    """Root configuration model.

    Attributes:
        tracker: Checkpoint tracker settings.
        server: MCP server settings.
        logging: Logging settings.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",  # Ignore unknown fields
    )

    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
