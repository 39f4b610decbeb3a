"""Engine configuration."""

from __future__ import annotations

import importlib.resources as ilr
import os
from dataclasses import dataclass, field
from pathlib import Path

from create_mcp.core.types import BuiltinTemplate

# Package data ships as plain directories, so the traversables are real paths.
DEFAULT_TEMPLATES_DIR = Path(str(ilr.files("create_mcp").joinpath("templates")))
DEFAULT_PROMPTS_DIR = Path(str(ilr.files("create_mcp").joinpath("prompts")))
DEFAULT_CONTROL_FILENAME = ".mcp-instructions.json"


@dataclass(kw_only=True)
class EngineConfig:
    """
    Configuration for template resolution and materialization.

    Attributes:
        templates_dir: Directory holding the built-in templates.
        prompts_dir: Directory copied into every generated project as ``prompts/``
            when it exists.
        builtin_templates: Registered built-in template names.
        builtin_prefix: Reserved prefix that always denotes a built-in template.
        remote_markers: Host substrings that mark a remote repository reference.
        control_filename: Engine-private instructions file, never copied.
        temp_root: Parent directory for remote clones. None means the working
            directory of the invocation.
        git_executable: Command used to clone remote templates.
        package_manager: Command used to install dependencies.
    """

    templates_dir: Path = DEFAULT_TEMPLATES_DIR
    prompts_dir: Path = DEFAULT_PROMPTS_DIR
    builtin_templates: tuple[str, ...] = field(
        default_factory=lambda: tuple(t.value for t in BuiltinTemplate)
    )
    builtin_prefix: str = "templates/"
    remote_markers: tuple[str, ...] = ("github.com", "gitlab.com", "bitbucket.org")
    control_filename: str = DEFAULT_CONTROL_FILENAME
    temp_root: Path | None = None
    git_executable: str = "git"
    package_manager: str = "npm"

    def __post_init__(self) -> None:
        if not self.builtin_templates:
            raise ValueError("builtin_templates must not be empty.")
        if not self.builtin_prefix:
            raise ValueError("builtin_prefix must be a non-empty string.")
        if not self.remote_markers or any(not m for m in self.remote_markers):
            raise ValueError(f"remote_markers must be non-empty, got {self.remote_markers}.")
        if not self.control_filename or "/" in self.control_filename:
            raise ValueError(
                f"control_filename must be a bare file name, got {self.control_filename!r}."
            )

    @classmethod
    def from_env(cls) -> EngineConfig:
        """
        Build a config from environment variables.

        Recognised variables (all optional): CREATE_MCP_TEMPLATES_DIR,
        CREATE_MCP_TEMP_DIR, CREATE_MCP_GIT, CREATE_MCP_PACKAGE_MANAGER.
        """
        config = cls()
        if os.environ.get("CREATE_MCP_TEMPLATES_DIR"):
            config.templates_dir = Path(os.environ["CREATE_MCP_TEMPLATES_DIR"])
        if os.environ.get("CREATE_MCP_TEMP_DIR"):
            config.temp_root = Path(os.environ["CREATE_MCP_TEMP_DIR"])
        if os.environ.get("CREATE_MCP_GIT"):
            config.git_executable = os.environ["CREATE_MCP_GIT"]
        if os.environ.get("CREATE_MCP_PACKAGE_MANAGER"):
            config.package_manager = os.environ["CREATE_MCP_PACKAGE_MANAGER"]
        return config
