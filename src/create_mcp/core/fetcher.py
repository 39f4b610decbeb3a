"""Fetching template snapshots for each source kind."""

from __future__ import annotations

import logging
import secrets
import shutil
import subprocess
import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from create_mcp.core.classifier import TemplateReference
from create_mcp.core.config import EngineConfig
from create_mcp.core.errors import FetchFailed, TemplateNotFound
from create_mcp.core.process import CommandRunner, SubprocessRunner, describe_failure
from create_mcp.core.types import SourceKind

logger = logging.getLogger(__name__)

_TEMP_PREFIX = ".create-mcp-"


def unique_temp_dir(root: Path) -> Path:
    """Return a path under ``root`` that no other call, in this or another process, returns."""
    return root / f"{_TEMP_PREFIX}{time.time_ns()}-{secrets.token_hex(4)}"


def _builtin_dir(identifier: str, config: EngineConfig) -> Path:
    template_dir = config.templates_dir / identifier
    if not template_dir.is_dir():
        raise TemplateNotFound(f'Built-in template "{identifier}" does not exist.')
    return template_dir


def _local_dir(identifier: str, cwd: Path) -> Path:
    template_dir = (cwd / identifier).resolve()
    if not template_dir.is_dir():
        raise TemplateNotFound(f'Template directory "{identifier}" does not exist.')
    return template_dir


def _clone(url: str, target: Path, config: EngineConfig, runner: CommandRunner) -> None:
    logger.info("Cloning template from %s", url)
    try:
        runner.run([config.git_executable, "clone", "--depth", "1", url, str(target)])
    except (subprocess.CalledProcessError, OSError) as exc:
        raise FetchFailed(f"Failed to clone repository {url}: {describe_failure(exc)}") from exc
    shutil.rmtree(target / ".git", ignore_errors=True)


@contextmanager
def fetch_template(
    reference: TemplateReference,
    *,
    config: EngineConfig | None = None,
    runner: CommandRunner | None = None,
    cwd: Path | None = None,
) -> Iterator[Path]:
    """
    Yield a directory holding the template's files.

    Built-in and local templates yield their source directory as is. Remote
    templates are cloned into a fresh temporary directory which is removed when
    the context exits, whether the body succeeded or raised.

    Raises:
        TemplateNotFound: The built-in name or local path does not exist.
        FetchFailed: The remote clone did not complete. No retry is attempted.
    """
    config = config or EngineConfig()
    cwd = cwd or Path.cwd()

    if reference.kind is SourceKind.BUILT_IN:
        yield _builtin_dir(reference.identifier, config)
        return
    if reference.kind is SourceKind.LOCAL_PATH:
        yield _local_dir(reference.identifier, cwd)
        return

    runner = runner or SubprocessRunner()
    snapshot = unique_temp_dir(config.temp_root or cwd)
    try:
        _clone(reference.identifier, snapshot, config, runner)
        yield snapshot
    finally:
        shutil.rmtree(snapshot, ignore_errors=True)
        logger.debug("Removed temporary clone %s", snapshot)
