"""External command execution used by the remote fetch and the install step."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from create_mcp.core.config import EngineConfig
from create_mcp.core.errors import InstallFailed

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    def run(
        self,
        args: list[str],
        *,
        cwd: Path | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]: ...


@dataclass
class SubprocessRunner:
    def run(
        self,
        args: list[str],
        *,
        cwd: Path | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            args,
            cwd=str(cwd) if cwd is not None else None,
            text=True,
            capture_output=True,
            check=check,
        )


def describe_failure(exc: subprocess.CalledProcessError | OSError) -> str:
    """Short human-readable reason for a failed command."""
    if isinstance(exc, subprocess.CalledProcessError):
        detail = (exc.stderr or exc.stdout or "").strip()
        reason = f"exited with status {exc.returncode}"
        return f"{reason}: {detail}" if detail else reason
    return str(exc)


def install_dependencies(
    destination: Path,
    *,
    config: EngineConfig | None = None,
    runner: CommandRunner | None = None,
) -> None:
    """Run ``<package manager> install`` inside ``destination``.

    The destination is passed to the child process as its working directory;
    the working directory of this process is left alone.
    """
    config = config or EngineConfig()
    runner = runner or SubprocessRunner()
    args = [config.package_manager, "install"]
    logger.info("Installing dependencies in %s", destination)
    try:
        runner.run(args, cwd=destination)
    except (subprocess.CalledProcessError, OSError) as exc:
        raise InstallFailed(
            f"'{' '.join(args)}' failed in {destination}: {describe_failure(exc)}"
        ) from exc
