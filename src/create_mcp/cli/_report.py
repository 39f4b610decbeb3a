"""Renders next steps and client setup instructions for a created project."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax

from create_mcp.core.instructions import ConfigInstructions, default_instructions
from create_mcp.core.types import MaterializationResult, TransportKind


def instructions_for(result: MaterializationResult) -> ConfigInstructions:
    """Template instructions, or the transport defaults, with placeholders filled in."""
    instructions = result.config_instructions
    if instructions is None or not instructions.platforms:
        instructions = default_instructions(result.transport_type)
    return instructions.substitute(result.project_name, result.project_dir)


def print_report(
    console: Console,
    result: MaterializationResult,
    location: str,
    *,
    installed: bool,
) -> None:
    """Print the next steps. ``location`` is the directory as the user typed it."""
    console.print("[bold cyan]●[/]  Next steps")
    console.print("[dim]│[/]")
    console.print(f"[dim]│[/]  cd {escape(location)}")
    if not installed:
        console.print("[dim]│[/]  npm install")
    console.print("[dim]│[/]  npm run build")
    console.print("[dim]│[/]  npm start")
    if result.transport_type is TransportKind.HTTP:
        console.print("[dim]│[/]  [dim]then connect to http://localhost:3000/mcp[/]")
    console.print("[dim]│[/]")

    for platform, entry in instructions_for(result).platforms.items():
        console.print(f"[bold cyan]◆[/]  {escape(platform)}")
        if entry.config_path:
            console.print(f"[dim]│[/]  [dim]{escape(entry.config_path)}[/]", highlight=False)
        if entry.instructions:
            console.print(f"[dim]│[/]  {escape(entry.instructions)}", highlight=False)
        if entry.snippet:
            console.print(
                Syntax(entry.snippet, "json", theme="ansi_dark", background_color="default")
            )
        console.print("[dim]│[/]")
    console.print()
