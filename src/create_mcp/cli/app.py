"""Typer CLI application for create-mcp."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from typer import Argument, Exit, Option, Typer

import create_mcp
from create_mcp.cli._prompts import (
    prompt_author,
    prompt_description,
    prompt_format,
    prompt_lint,
    prompt_overwrite,
    prompt_template,
)
from create_mcp.cli._report import print_report
from create_mcp.core import (
    BuiltinTemplate,
    CustomizationChoices,
    EngineConfig,
    ProjectIdentity,
    ProjectRequest,
    ScaffoldError,
    SourceKind,
    TemplateReference,
    create_project,
    install_dependencies,
)

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


def _print_templates() -> None:
    _console.print()
    _console.print("[bold cyan]◆[/]  Built-in templates")
    _console.print("[dim]│[/]")
    for t in BuiltinTemplate:
        _console.print(f"[dim]│[/]  [bold cyan]{t.value:<14}[/] [bold]{t.label}[/]")
        _console.print(f"[dim]│[/]  {' ' * 14} [dim]{t.description}[/]")
        _console.print("[dim]│[/]")
    _console.print("[dim]│[/]  A local directory or a GitHub repository URL works too.")
    _console.print()


def _list_templates_callback(value: bool) -> None:
    if value:
        _print_templates()
        raise Exit()


def _echo_choice(question: str, answer: str) -> None:
    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(f"[dim]│[/]  {answer}")
    _console.print("[dim]│[/]")


@app.command()
def create(
    project_name: Annotated[str, Argument(help="Name of your MCP project")],
    template_str: Annotated[
        str | None,
        Option(
            "--template",
            "-t",
            help="Built-in template name, local path or GitHub repository URL.",
            show_default=False,
        ),
    ] = None,
    description: Annotated[
        str | None, Option("--description", help="Project description", show_default=False)
    ] = None,
    author: Annotated[
        str | None, Option("--author", help="Author name", show_default=False)
    ] = None,
    install: Annotated[
        bool, Option("--install/--no-install", help="Install dependencies after creation")
    ] = True,
    customize: Annotated[
        bool,
        Option(
            "--customize/--no-customize",
            help="Offer ESLint / Prettier customization for built-in templates",
        ),
    ] = True,
    lint: Annotated[
        bool | None, Option("--lint/--no-lint", help="Add ESLint", show_default=False)
    ] = None,
    fmt: Annotated[
        bool | None, Option("--format/--no-format", help="Add Prettier", show_default=False)
    ] = None,
    force: Annotated[
        bool, Option("--force", "-f", help="Overwrite an existing directory without asking")
    ] = False,
    verbose: Annotated[bool, Option("--verbose", "-v", help="Show debug logging")] = False,
    list_templates: Annotated[
        bool,
        Option(
            "--list-templates",
            "-l",
            help="List the built-in templates and exit.",
            callback=_list_templates_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Bootstrap a new Model Context Protocol (MCP) server project."""
    _configure_logging(verbose)
    config = EngineConfig.from_env()
    project_dir = Path(project_name)
    name = project_dir.name

    _console.print()
    _console.print(f"[bold cyan]●[/]  create-mcp v{create_mcp.__version__}")
    _console.print("[dim]│[/]")

    # Never overwrite the working directory or anything containing it.
    cwd = Path.cwd().resolve()
    target = project_dir.resolve()
    if not name or name in (".", "..") or target == cwd or target in cwd.parents:
        _console.print(
            f"[bold red]Invalid project name:[/] {escape(project_name)} "
            "must not be the current directory or one of its parents."
        )
        raise Exit(code=1)

    if project_dir.exists():
        if force:
            _echo_choice(f"Directory {project_name} already exists. Overwrite?", "Yes")
        elif not prompt_overwrite(project_name):
            _console.print("[yellow]Operation cancelled.[/]")
            raise Exit()
        shutil.rmtree(project_dir)

    if template_str is None:
        template_str = prompt_template().value
    else:
        _echo_choice("Choose a template", template_str)
    reference = TemplateReference.parse(template_str, config)

    if description is None:
        description = prompt_description(name)
    else:
        _echo_choice("Project description", description)

    if author is None:
        author = prompt_author()
    else:
        _echo_choice("Author name", author)

    # Customization is only offered for built-in templates.
    choices: CustomizationChoices | None = None
    if customize and reference.kind is SourceKind.BUILT_IN:
        if lint is None:
            lint = prompt_lint()
        if fmt is None:
            fmt = prompt_format()
        choices = CustomizationChoices(lint=lint, format=fmt)

    _console.print(f"[bold green]◇[/]  Creating {project_name}/...")
    _console.print("[dim]│[/]")

    request = ProjectRequest(
        reference=template_str,
        destination=project_dir,
        identity=ProjectIdentity(name=name, description=description, author=author),
        choices=choices,
    )
    try:
        result = create_project(request, config=config)
        if install:
            _console.print("[bold green]◇[/]  Installing dependencies...")
            _console.print("[dim]│[/]")
            install_dependencies(result.project_dir, config=config)
    except ScaffoldError as exc:
        _console.print(f"[bold red]Error creating project ({exc.stage}):[/] {escape(str(exc))}")
        raise Exit(code=1) from None

    _console.print(f"[bold cyan]●[/]  Done! MCP project created in {result.project_dir}")
    _console.print("[dim]│[/]")
    print_report(_console, result, project_name, installed=install)
