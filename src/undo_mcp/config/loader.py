"""Layered configuration loading for undo-mcp."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from undo_mcp.config.models import UndoMCPConfig
from undo_mcp.config.sources import (
    ConfigSource,
    EnvironmentSource,
    JsonFileSource,
    SettingsFile,
    YamlFileSource,
)
from undo_mcp.core import ConfigError, get_logger

logger = get_logger("config.loader")


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``, recursing into nested dicts.

    The result shares no mutable values with either input.
    """
    merged = {key: copy.deepcopy(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


class ConfigLoader:
    """Builds an UndoMCPConfig from layered sources.

    Later layers override earlier ones:
    1. Defaults (from UndoMCPConfig)
    2. User settings (~/.undo-mcp/settings.json or .yaml)
    3. Project settings (./.undo-mcp/settings.json or .yaml)
    4. Explicit config file (--config)
    5. Environment variables (UNDO_MCP_*)

    A broken user or project file is skipped. A missing or broken
    explicit file is an error.
    """

    def __init__(
        self,
        user_dir: Path | None = None,
        project_dir: Path | None = None,
        config_file: Path | None = None,
        environ: dict[str, str] | None = None,
    ) -> None:
        self._user_dir = user_dir if user_dir is not None else Path.home() / ".undo-mcp"
        self._project_dir = (
            project_dir if project_dir is not None else Path.cwd() / ".undo-mcp"
        )
        self._config_file = config_file
        self._environ = environ
        self._config: UndoMCPConfig | None = None

    @property
    def config(self) -> UndoMCPConfig:
        """Configuration, loaded on first access."""
        if self._config is None:
            self._config = self.load_all()
        return self._config

    def load_all(self) -> UndoMCPConfig:
        """Merge every layer and validate the result.

        Raises:
            ConfigError: If the explicit config file is missing or broken,
                or the merged configuration does not validate.
        """
        config: dict[str, Any] = UndoMCPConfig().model_dump()

        for directory in (self._user_dir, self._project_dir):
            source = self._directory_source(directory)
            if source is None:
                continue
            try:
                config = deep_merge(config, source.load())
            except ConfigError as e:
                logger.debug("Skipped config source %s: %s", source, e)

        if self._config_file is not None:
            if not self._config_file.is_file():
                raise ConfigError(f"Config file not found: {self._config_file}")
            config = deep_merge(config, SettingsFile.for_path(self._config_file).load())

        config = deep_merge(config, EnvironmentSource(self._environ).load())

        try:
            return UndoMCPConfig.model_validate(config)
        except ValidationError as e:
            logger.error("Configuration validation failed: %s", e)
            raise ConfigError(f"Configuration validation failed: {e}") from e

    @staticmethod
    def _directory_source(directory: Path) -> ConfigSource | None:
        """settings.json wins over settings.yaml in one directory."""
        candidates: tuple[tuple[type[SettingsFile], str], ...] = (
            (JsonFileSource, "settings.json"),
            (YamlFileSource, "settings.yaml"),
        )
        for source_cls, name in candidates:
            path = directory / name
            if path.is_file():
                return source_cls(path)
        return None
