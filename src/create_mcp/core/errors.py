"""Exceptions raised by the scaffolding engine."""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for engine failures. ``stage`` names the pipeline step that failed."""

    stage: str = "scaffold"

    def __init__(self, message: str, *, stage: str | None = None) -> None:
        super().__init__(message)
        if stage is not None:
            self.stage = stage


class TemplateNotFound(ScaffoldError):
    """Built-in template name or local template path does not exist."""

    stage = "fetch"


class FetchFailed(ScaffoldError):
    """Cloning a remote template did not complete."""

    stage = "fetch"


class MaterializeFailed(ScaffoldError):
    """Copying the template snapshot into the destination did not complete."""

    stage = "materialize"


class InstructionsParseFailed(ScaffoldError):
    """Control file could not be parsed. Recoverable: callers fall back to defaults."""

    stage = "instructions"


class InstallFailed(ScaffoldError):
    """Dependency installation in the generated project failed."""

    stage = "install"
