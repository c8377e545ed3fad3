"""undo-mcp - checkpoint and undo safety net for file-editing agents."""

try:
    from importlib.metadata import version

    __version__ = version("undo-mcp")
except Exception:
    __version__ = "0.0.0"  # Fallback for development/testing

__all__ = ["__version__"]
