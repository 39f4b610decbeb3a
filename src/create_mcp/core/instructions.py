"""Per-template configuration instructions: loading, defaults and placeholder substitution.

A template may ship a JSON control file at its root describing how to register
the generated server with each client platform::

    {
      "transportType": "stdio",
      "Claude Desktop": {
        "configPath": "~/Library/Application Support/Claude/claude_desktop_config.json",
        "instructions": "Add to mcpServers:",
        "snippet": "{ ... \"${projectDir}/dist/index.js\" ... }"
      }
    }

``transportType`` is reserved; every other key is a platform. The control file
never reaches the generated project.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from create_mcp.core.config import DEFAULT_CONTROL_FILENAME
from create_mcp.core.errors import InstructionsParseFailed
from create_mcp.core.types import TransportKind

logger = logging.getLogger(__name__)

TRANSPORT_KEY = "transportType"

PROJECT_NAME = "projectName"
PROJECT_DIR = "projectDir"
PLACEHOLDERS: frozenset[str] = frozenset({PROJECT_NAME, PROJECT_DIR})

_PLACEHOLDER_RE = re.compile(r"\$\{([^{}]*)\}")

# ---------------------------------------------------------------------------
# Placeholders
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Placeholder:
    """A recognised ``${name}`` token."""

    name: str


Token = str | Placeholder


def tokenize(text: str) -> list[Token]:
    """
    Split ``text`` into literal runs and recognised placeholders.

    Only names in ``PLACEHOLDERS`` become ``Placeholder`` tokens. Any other
    ``${...}`` sequence stays part of the literal text.
    """
    tokens: list[Token] = []
    pos = 0
    for match in _PLACEHOLDER_RE.finditer(text):
        name = match.group(1)
        if name not in PLACEHOLDERS:
            logger.debug("Leaving unknown placeholder %r untouched", match.group(0))
            continue
        if match.start() > pos:
            tokens.append(text[pos : match.start()])
        tokens.append(Placeholder(name))
        pos = match.end()
    if pos < len(text):
        tokens.append(text[pos:])
    return tokens


def substitute(tokens: list[Token], values: Mapping[str, str]) -> str:
    """Join ``tokens`` back into text, replacing every placeholder with its value."""
    missing = {t.name for t in tokens if isinstance(t, Placeholder)} - values.keys()
    if missing:
        raise KeyError(f"No value for placeholder(s): {', '.join(sorted(missing))}")
    return "".join(values[t.name] if isinstance(t, Placeholder) else t for t in tokens)


# ---------------------------------------------------------------------------
# Document model
# ---------------------------------------------------------------------------


@dataclass(frozen=True, kw_only=True)
class PlatformInstructions:
    """
    Setup instructions for one client platform.

    Attributes:
        config_path: Where the platform keeps its configuration file.
        instructions: Free-form text telling the user what to do.
        snippet: Configuration text to paste into the file.
    """

    config_path: str | None = None
    instructions: str | None = None
    snippet: str | None = None

    @classmethod
    def from_dict(cls, platform: str, data: Any) -> PlatformInstructions:
        if not isinstance(data, dict):
            raise InstructionsParseFailed(
                f"Instructions for {platform!r} must be an object, got {type(data).__name__}."
            )
        snippet = data.get("snippet")
        if snippet is not None and not isinstance(snippet, str):
            snippet = json.dumps(snippet, indent=2)
        return cls(
            config_path=_optional_str(platform, "configPath", data.get("configPath")),
            instructions=_optional_str(platform, "instructions", data.get("instructions")),
            snippet=snippet,
        )

    def to_dict(self) -> dict[str, str]:
        out: dict[str, str] = {}
        if self.config_path is not None:
            out["configPath"] = self.config_path
        if self.instructions is not None:
            out["instructions"] = self.instructions
        if self.snippet is not None:
            out["snippet"] = self.snippet
        return out


def _optional_str(platform: str, key: str, value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise InstructionsParseFailed(f"{platform}.{key} must be a string, got {type(value).__name__}.")


@dataclass(frozen=True, kw_only=True)
class ConfigInstructions:
    """
    Parsed control file.

    Attributes:
        transport_type: Explicit transport, or None to infer it from the template name.
        platforms: Platform name to instructions, in document order.
    """

    transport_type: TransportKind | None = None
    platforms: dict[str, PlatformInstructions] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ConfigInstructions:
        if not isinstance(data, dict):
            raise InstructionsParseFailed(
                f"Instructions document must be an object, got {type(data).__name__}."
            )
        transport: TransportKind | None = None
        if TRANSPORT_KEY in data:
            try:
                transport = TransportKind(data[TRANSPORT_KEY])
            except ValueError:
                valid = ", ".join(t.value for t in TransportKind)
                raise InstructionsParseFailed(
                    f"{TRANSPORT_KEY} must be one of {valid}, got {data[TRANSPORT_KEY]!r}."
                ) from None
        platforms = {
            name: PlatformInstructions.from_dict(name, value)
            for name, value in data.items()
            if name != TRANSPORT_KEY
        }
        return cls(transport_type=transport, platforms=platforms)

    @classmethod
    def from_json(cls, text: str) -> ConfigInstructions:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InstructionsParseFailed(f"Invalid JSON: {exc}") from exc
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.transport_type is not None:
            out[TRANSPORT_KEY] = self.transport_type.value
        for name, platform in self.platforms.items():
            out[name] = platform.to_dict()
        return out

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def substitute(self, project_name: str, project_dir: Path | str) -> ConfigInstructions:
        """
        Return a copy with ``${projectName}`` and ``${projectDir}`` filled in.

        Each field's text is tokenized and substituted on its own, then the
        document is parsed back. Plain text fields receive the values as they
        are. A snippet holding JSON receives them JSON-escaped, so quotes and
        backslashes in a name or path keep the snippet parseable.
        """
        plain = {PROJECT_NAME: project_name, PROJECT_DIR: str(project_dir)}
        escaped = {key: json.dumps(value)[1:-1] for key, value in plain.items()}
        data: dict[str, Any] = {}
        if self.transport_type is not None:
            data[TRANSPORT_KEY] = self.transport_type.value
        for name, platform in self.platforms.items():
            snippet_values = escaped if _is_json(platform.snippet) else plain
            data[name] = {
                key: substitute(tokenize(text), snippet_values if key == "snippet" else plain)
                for key, text in platform.to_dict().items()
            }
        return ConfigInstructions.from_dict(data)


def _is_json(text: str | None) -> bool:
    if text is None:
        return False
    try:
        json.loads(text)
    except json.JSONDecodeError:
        return False
    return True


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve(
    snapshot_root: Path, control_filename: str = DEFAULT_CONTROL_FILENAME
) -> ConfigInstructions | None:
    """
    Load the control file at the root of a template snapshot.

    Returns None when the file is absent, or when it cannot be read or parsed;
    the latter is logged as a warning so a broken template file never blocks
    project creation.
    """
    path = snapshot_root / control_filename
    if not path.is_file():
        return None
    try:
        return ConfigInstructions.from_json(path.read_text(encoding="utf-8"))
    except (InstructionsParseFailed, OSError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring %s: %s", control_filename, exc)
        return None


def determine_transport_type(
    instructions: ConfigInstructions | None, template_name: str
) -> TransportKind:
    """
    Transport of the generated server.

    An explicit ``transportType`` always wins. Otherwise the last path segment
    of the template name decides: ``http`` in it means HTTP, anything else stdio.
    """
    if instructions is not None and instructions.transport_type is not None:
        return instructions.transport_type
    segment = template_name.strip().rstrip("/").rsplit("/", 1)[-1].lower()
    segment = segment.removesuffix(".git")
    return TransportKind.HTTP if "http" in segment else TransportKind.STDIO


# ---------------------------------------------------------------------------
# Built-in defaults
# ---------------------------------------------------------------------------

_SERVER_PATH = "${projectDir}/dist/index.js"
_HTTP_URL = "http://localhost:3000/mcp"

_DEFAULTS: dict[TransportKind, dict[str, Any]] = {
    TransportKind.STDIO: {
        TRANSPORT_KEY: "stdio",
        "Claude Desktop": {
            "configPath": "$HOME/Library/Application Support/Claude/claude_desktop_config.json",
            "instructions": "Add the server to the mcpServers section:",
            "snippet": {
                "mcpServers": {"${projectName}": {"command": "node", "args": [_SERVER_PATH]}}
            },
        },
        "VS Code": {
            "configPath": "$HOME/Library/Application Support/Code/User/settings.json",
            "instructions": 'Add the server to the "mcp.servers" section:',
            "snippet": {
                "mcp": {
                    "servers": {
                        "${projectName}": {
                            "type": "stdio",
                            "command": "node",
                            "args": [_SERVER_PATH],
                        }
                    }
                }
            },
        },
        "Cursor": {
            "configPath": "$HOME/.cursor/mcp.json",
            "instructions": "Add the server to the mcpServers section:",
            "snippet": {
                "mcpServers": {"${projectName}": {"command": "node", "args": [_SERVER_PATH]}}
            },
        },
    },
    TransportKind.HTTP: {
        TRANSPORT_KEY: "http",
        "Claude Desktop": {
            "configPath": "$HOME/Library/Application Support/Claude/claude_desktop_config.json",
            "instructions": f"Start the server with `npm start`, then connect to {_HTTP_URL}:",
            "snippet": {"mcpServers": {"${projectName}": {"url": _HTTP_URL}}},
        },
        "VS Code": {
            "configPath": "$HOME/Library/Application Support/Code/User/settings.json",
            "instructions": 'Start the server with `npm start`, then add it to "mcp.servers":',
            "snippet": {"mcp": {"servers": {"${projectName}": {"type": "http", "url": _HTTP_URL}}}},
        },
        "Cursor": {
            "configPath": "$HOME/.cursor/mcp.json",
            "instructions": "Start the server with `npm start`, then add it to mcpServers:",
            "snippet": {"mcpServers": {"${projectName}": {"url": _HTTP_URL}}},
        },
    },
}


def default_instructions(transport: TransportKind) -> ConfigInstructions:
    """Built-in instructions used when a template ships no control file."""
    return ConfigInstructions.from_dict(_DEFAULTS[transport])
