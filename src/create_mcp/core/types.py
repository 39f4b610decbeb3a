"""Enums and value types shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from create_mcp.core.instructions import ConfigInstructions


class SourceKind(str, Enum):
    """Where a template's files come from."""

    BUILT_IN = "built-in"
    LOCAL_PATH = "local-path"
    REMOTE_REPOSITORY = "remote-repository"


class TransportKind(str, Enum):
    """Transport a generated server is built to use."""

    STDIO = "stdio"
    HTTP = "http"


class BuiltinTemplate(str, Enum):
    """Templates shipped inside the package."""

    BASIC_STDIO = "basic-stdio"
    BASIC_HTTP = "basic-http"

    @property
    def label(self) -> str:
        labels: dict[BuiltinTemplate, str] = {
            BuiltinTemplate.BASIC_STDIO: "Basic stdio server",
            BuiltinTemplate.BASIC_HTTP: "Basic HTTP server",
        }
        return labels[self]

    @property
    def description(self) -> str:
        descriptions: dict[BuiltinTemplate, str] = {
            BuiltinTemplate.BASIC_STDIO: "Minimal MCP server over stdin/stdout with an echo tool.",
            BuiltinTemplate.BASIC_HTTP: "Minimal MCP server over Streamable HTTP (Express) on port 3000.",  # noqa: E501
        }
        return descriptions[self]

    @property
    def transport(self) -> TransportKind:
        if self is BuiltinTemplate.BASIC_HTTP:
            return TransportKind.HTTP
        return TransportKind.STDIO


@dataclass(frozen=True, kw_only=True)
class ProjectIdentity:
    """
    Identity written into the generated project.

    Attributes:
        name: Project name, also the package name in the manifest.
        description: One-line description.
        author: Author name.
    """

    name: str
    description: str
    author: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("name must be a non-empty string.")

    @property
    def title(self) -> str:
        """Name with every hyphen-separated segment capitalized, segments joined."""
        return "".join(seg[:1].upper() + seg[1:] for seg in self.name.split("-"))


@dataclass(frozen=True, kw_only=True)
class CustomizationChoices:
    """Opt-in tooling layered onto a generated project."""

    lint: bool = False
    format: bool = False

    @property
    def any(self) -> bool:
        return self.lint or self.format


@dataclass(frozen=True, kw_only=True)
class MaterializationResult:
    """
    Outcome of a successful materialization, handed to the reporting layer.

    Attributes:
        template_name: Template reference as identified by the classifier.
        project_name: Name written into the project's manifest. It fills
            ``${projectName}`` in the setup instructions.
        transport_type: Transport the generated server uses.
        config_instructions: Instructions supplied by the template, or None when
            the built-in defaults for ``transport_type`` apply.
        project_dir: Absolute path of the generated project.
        kind: Source kind of the template.
    """

    template_name: str
    project_name: str
    transport_type: TransportKind
    config_instructions: ConfigInstructions | None
    project_dir: Path
    kind: SourceKind
