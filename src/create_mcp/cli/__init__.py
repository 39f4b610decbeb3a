"""Command-line interface for create-mcp."""

from create_mcp.cli.app import app

__all__ = ["app"]
