"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys
from typing import TypeVar

from rich.console import Console
from simple_term_menu import TerminalMenu

from create_mcp.core.types import BuiltinTemplate

_console = Console()

T = TypeVar("T")

DEFAULT_AUTHOR = "posidron"


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _select(question: str, options: list[T], labels: list[str]) -> T:
    """Display a clack-style selection prompt and return the chosen option."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
    )
    raw_index = menu.show()

    if raw_index is None:
        raise SystemExit(1)

    index: int = int(raw_index)
    selected = options[index]

    # Overwrite the ◆ question + │ bar that stayed on screen
    _clear_lines(2)

    _console.print(f"[bold green]◇[/]  {question}")
    for i, lbl in enumerate(labels):
        if i == index:
            _console.print(f"[dim]│[/]  [bold green]●[/] {lbl}")
        else:
            _console.print(f"[dim]│[/]    [dim s]{lbl}[/]")
    _print_bar()

    return selected


def _confirm(question: str, default: bool = True) -> bool:
    """Display a clack-style yes/no prompt."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    suffix = " [Y/n] " if default else " [y/N] "
    _console.print("[dim]│[/]  ", end="")
    answer = input(suffix).strip().lower()

    result = default if answer == "" else answer in ("y", "yes")

    display = "Yes" if result else "No"

    # Overwrite the ◆ question + │ bar + │ [Y/n] input line
    _clear_lines(3)

    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {display}")
    _print_bar()

    return result


def _text(question: str, default: str) -> str:
    """Display a clack-style free-text prompt. An empty answer selects ``default``."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    _console.print("[dim]│[/]  ", end="")
    answer = input(f" ({default}) ").strip()
    result = answer or default

    _clear_lines(3)

    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {result}")
    _print_bar()

    return result


def prompt_template() -> BuiltinTemplate:
    """Prompt user to choose a built-in template."""
    templates = list(BuiltinTemplate)
    labels = [t.label for t in templates]
    return _select("Choose a template", templates, labels)


def prompt_description(project_name: str) -> str:
    return _text("Project description", f"{project_name} - A Model Context Protocol server")


def prompt_author() -> str:
    return _text("Author name", DEFAULT_AUTHOR)


def prompt_overwrite(project_name: str) -> bool:
    """Ask whether an existing project directory may be replaced."""
    return _confirm(f"Directory {project_name} already exists. Overwrite?", default=False)


def prompt_lint() -> bool:
    return _confirm("Would you like to use ESLint?", default=True)


def prompt_format() -> bool:
    return _confirm("Would you like to use Prettier?", default=True)
