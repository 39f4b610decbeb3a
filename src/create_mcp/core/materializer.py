"""Copying a template snapshot into the destination project directory."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable
from pathlib import Path

from create_mcp.core.config import DEFAULT_CONTROL_FILENAME
from create_mcp.core.errors import MaterializeFailed

logger = logging.getLogger(__name__)


def _ignore_control_file(control_filename: str) -> Callable[[str, list[str]], set[str]]:
    def ignore(directory: str, names: list[str]) -> set[str]:
        return {
            name
            for name in names
            if name == control_filename and (Path(directory) / name).is_file()
        }

    return ignore


def materialize(
    snapshot: Path,
    destination: Path,
    *,
    control_filename: str = DEFAULT_CONTROL_FILENAME,
) -> None:
    """
    Copy every file under ``snapshot`` into ``destination``.

    Directories are created as needed and an existing destination is merged
    into. Files named ``control_filename`` are skipped at every depth.

    Raises:
        MaterializeFailed: A file or directory could not be copied.
    """
    logger.info("Copying template files to %s", destination)
    try:
        shutil.copytree(
            snapshot,
            destination,
            ignore=_ignore_control_file(control_filename),
            dirs_exist_ok=True,
        )
    except (shutil.Error, OSError) as exc:
        raise MaterializeFailed(f"Could not copy template into {destination}: {exc}") from exc


def copy_prompts(destination: Path, prompts_dir: Path) -> bool:
    """Copy the bundled prompts directory into ``destination/prompts`` if it exists."""
    if not prompts_dir.is_dir():
        return False
    logger.info("Copying prompts directory")
    shutil.copytree(prompts_dir, destination / "prompts", dirs_exist_ok=True)
    return True
