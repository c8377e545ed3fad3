"""CLI entry point for undo-mcp."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from undo_mcp import __version__
from undo_mcp.config import ConfigLoader, UndoMCPConfig
from undo_mcp.core import ConfigError, get_logger, setup_logging
from undo_mcp.core.logging import LOG_LEVEL_MAP
from undo_mcp.mcp import UndoMCPServer

logger = get_logger("cli")

# Flags that take a value
VALUE_FLAGS = ("--config", "--log-level", "--log-file")


def print_help() -> None:
    """Print usage to stdout."""
    print(
        f"undo-mcp {__version__}\n"
        "\n"
        "Checkpoint/undo MCP server for file-editing agents (stdio transport).\n"
        "\n"
        "Usage: undo-mcp [options]\n"
        "\n"
        "Options:\n"
        "  -h, --help            Show this help and exit\n"
        "  -v, --version         Show version and exit\n"
        "  --config PATH         Load settings from a JSON or YAML file\n"
        "  --log-level LEVEL     DEBUG, INFO, WARNING, ERROR or CRITICAL\n"
        "  --log-file PATH       Also write logs to a rotating file\n"
        "\n"
        "Environment:\n"
        "  UNDO_MCP_LOG_LEVEL, UNDO_MCP_ENCODING, UNDO_MCP_MAX_FILE_SIZE_KB, ..."
    )


def parse_args(args: list[str]) -> dict[str, str]:
    """Collect ``--flag value`` pairs.

    Raises:
        ValueError: On unknown flags or a flag missing its value.
    """
    options: dict[str, str] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        if "=" in arg and arg.split("=", 1)[0] in VALUE_FLAGS:
            flag, value = arg.split("=", 1)
            options[flag] = value
        elif arg in VALUE_FLAGS:
            if i + 1 >= len(args):
                raise ValueError(f"Option {arg} requires a value")
            options[arg] = args[i + 1]
            i += 1
        else:
            raise ValueError(f"Unknown option: {arg}")
        i += 1
    return options


def load_config(options: dict[str, str]) -> UndoMCPConfig:
    """Load configuration and apply command-line overrides.

    Raises:
        ConfigError: If configuration is invalid.
    """
    config_file = options.get("--config")
    loader = ConfigLoader(config_file=Path(config_file) if config_file else None)
    config = loader.load_all()

    try:
        if "--log-level" in options:
            config.logging.level = options["--log-level"]
        if "--log-file" in options:
            config.logging.file = Path(options["--log-file"])
    except ValueError as e:
        raise ConfigError(str(e)) from e

    return config


def main() -> int:
    """Main entry point for the undo-mcp CLI.

    Returns:
        Exit code (0 for success, 1 for configuration errors,
        2 for usage errors, 130 when interrupted).
    """
    args = sys.argv[1:]

    if "--version" in args or "-v" in args:
        print(f"undo-mcp {__version__}")
        return 0

    if "--help" in args or "-h" in args:
        print_help()
        return 0

    try:
        options = parse_args(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        print("Use --help for usage information.", file=sys.stderr)
        return 2

    try:
        config = load_config(options)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        level=LOG_LEVEL_MAP[config.logging.level],
        log_file=config.logging.file,
    )

    server = UndoMCPServer(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
