"""create-mcp: scaffolding tool for Model Context Protocol server projects."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("create-mcp")
except PackageNotFoundError:
    __version__ = "0.0.0"
