"""Where undo-mcp settings come from: settings files and UNDO_MCP_* variables."""

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar

import yaml

from undo_mcp.core import ConfigError, get_logger

logger = get_logger("config.sources")


class ConfigSource(ABC):
    """One layer of configuration, as a partial nested dict."""

    @abstractmethod
    def load(self) -> dict[str, Any]:
        """Return this layer's settings; empty if it has none."""


class SettingsFile(ConfigSource):
    """A settings file on disk. Subclasses supply the parser.

    A missing or blank file contributes nothing. A file that does not
    parse to a mapping raises ConfigError.
    """

    FORMAT: ClassVar[str]
    ROOT: ClassVar[str]
    PARSE_ERRORS: ClassVar[tuple[type[Exception], ...]]
    SUFFIXES: ClassVar[tuple[str, ...]]

    def __init__(self, path: Path) -> None:
        self._path = path

    @staticmethod
    def for_path(path: Path) -> SettingsFile:
        """Pick the file source matching a path's suffix."""
        suffix = path.suffix.lower()
        for source_cls in (JsonFileSource, YamlFileSource):
            if suffix in source_cls.SUFFIXES:
                return source_cls(path)
        raise ConfigError(f"Unsupported configuration format: {suffix}")

    @abstractmethod
    def parse(self, text: str) -> Any: ...

    def load(self) -> dict[str, Any]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise ConfigError(f"Cannot read {self._path}: {e}") from e

        if not text.strip():
            return {}

        try:
            data = self.parse(text)
        except self.PARSE_ERRORS as e:
            logger.warning("Invalid %s in %s: %s", self.FORMAT, self._path, e)
            raise ConfigError(f"Invalid {self.FORMAT} in {self._path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"{self.FORMAT} root must be {self.ROOT}, got {type(data).__name__}"
            )
        return data

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path})"


class JsonFileSource(SettingsFile):
    FORMAT = "JSON"
    ROOT = "object"
    PARSE_ERRORS = (json.JSONDecodeError,)
    SUFFIXES = (".json",)

    def parse(self, text: str) -> Any:
        return json.loads(text)


class YamlFileSource(SettingsFile):
    FORMAT = "YAML"
    ROOT = "mapping"
    PARSE_ERRORS = (yaml.YAMLError,)
    SUFFIXES = (".yaml", ".yml")

    def parse(self, text: str) -> Any:
        return yaml.safe_load(text)


class EnvironmentSource(ConfigSource):
    """Settings from UNDO_MCP_* variables, mapped to (section, key)."""

    MAPPINGS: ClassVar[dict[str, tuple[str, str]]] = {
        "UNDO_MCP_ENCODING": ("tracker", "encoding"),
        "UNDO_MCP_DEFAULT_DESCRIPTION": ("tracker", "default_description"),
        "UNDO_MCP_MAX_FILE_SIZE_KB": ("tracker", "max_file_size_kb"),
        "UNDO_MCP_SERVER_NAME": ("server", "name"),
        "UNDO_MCP_LOG_LEVEL": ("logging", "level"),
        "UNDO_MCP_LOG_FILE": ("logging", "file"),
    }

    INTEGER_KEYS: ClassVar[frozenset[str]] = frozenset({"max_file_size_kb"})

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else dict(os.environ)

    def load(self) -> dict[str, Any]:
        config: dict[str, Any] = {}
        for env_var, (section, key) in self.MAPPINGS.items():
            if env_var in self._environ:
                config.setdefault(section, {})[key] = self._convert(key, self._environ[env_var])
        return config

    def _convert(self, key: str, value: str) -> Any:
        if key not in self.INTEGER_KEYS:
            return value
        try:
            return int(value)
        except ValueError:
            # Left as a string so validation reports it
            logger.warning("Invalid integer value for %s: %s", key, value)
            return value

    def __repr__(self) -> str:
        return "EnvironmentSource()"
