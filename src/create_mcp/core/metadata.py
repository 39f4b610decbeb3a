"""Rewriting the generated project's manifest and README to the new identity."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from create_mcp.core.documents import MANIFEST_FILENAME, README_FILENAME, Manifest, Readme
from create_mcp.core.types import ProjectIdentity

logger = logging.getLogger(__name__)


def server_stanza(name: str, server_path: Path) -> list[str]:
    """Lines of the ``mcpServers`` entry that launches the built server with node."""
    return [
        f"{json.dumps(name)}: {{",
        '  "command": "node",',
        '  "args": [',
        f"    {json.dumps(str(server_path))}",
        "  ]",
        "}",
    ]


def rewrite_manifest(destination: Path, identity: ProjectIdentity) -> bool:
    path = destination / MANIFEST_FILENAME
    if not path.is_file():
        logger.debug("No %s in %s, skipping manifest rewrite", MANIFEST_FILENAME, destination)
        return False
    try:
        manifest = Manifest.load(path)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors
        logger.warning("Leaving %s unchanged: %s", path, exc)
        return False
    manifest.set_fields(
        name=identity.name, description=identity.description, author=identity.author
    )
    manifest.dump(path)
    return True


def rewrite_readme(destination: Path, identity: ProjectIdentity) -> bool:
    path = destination / README_FILENAME
    if not path.is_file():
        logger.debug("No %s in %s, skipping README rewrite", README_FILENAME, destination)
        return False
    try:
        readme = Readme.load(path)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Leaving %s unchanged: %s", path, exc)
        return False
    readme.replace_heading(identity.title)
    readme.replace_summary(identity.description)
    server_path = destination.resolve() / "dist" / "index.js"
    readme.replace_server_entry(server_stanza(identity.name, server_path))
    readme.dump(path)
    return True


def rewrite(destination: Path, identity: ProjectIdentity) -> None:
    """Write ``identity`` into the manifest and README found at ``destination``, if any."""
    rewrite_manifest(destination, identity)
    rewrite_readme(destination, identity)
