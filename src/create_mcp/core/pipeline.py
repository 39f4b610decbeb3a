"""End-to-end materialization of a project from a template reference."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from create_mcp.core import customize, metadata
from create_mcp.core.classifier import TemplateReference
from create_mcp.core.config import EngineConfig
from create_mcp.core.fetcher import fetch_template
from create_mcp.core.instructions import determine_transport_type, resolve
from create_mcp.core.materializer import copy_prompts, materialize
from create_mcp.core.process import CommandRunner
from create_mcp.core.types import CustomizationChoices, MaterializationResult, ProjectIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class ProjectRequest:
    """
    Everything the engine needs to produce one project.

    Attributes:
        reference: Template reference: built-in name, local path or repository URL.
        destination: Project directory to create. Conflicts with an existing
            directory must be settled by the caller beforehand.
        identity: Name, description and author written into the project.
        choices: Tooling to add, or None to skip customization.
    """

    reference: str
    destination: Path
    identity: ProjectIdentity
    choices: CustomizationChoices | None = None


def create_project(
    request: ProjectRequest,
    *,
    config: EngineConfig | None = None,
    runner: CommandRunner | None = None,
    cwd: Path | None = None,
) -> MaterializationResult:
    """
    Materialize ``request.reference`` into ``request.destination``.

    Stages run strictly in order: classify, fetch, copy, rewrite metadata,
    customize. Once the copy has completed the destination holds the whole
    template; later stages only edit metadata and tooling files.

    Raises:
        TemplateNotFound: Built-in name or local path does not exist.
        FetchFailed: Remote clone failed. The destination is not created.
        MaterializeFailed: The template could not be copied into the destination.
    """
    config = config or EngineConfig()
    cwd = cwd or Path.cwd()
    destination = request.destination
    if not destination.is_absolute():
        destination = cwd / destination

    reference = TemplateReference.parse(request.reference, config)
    logger.info("Using %s template %s", reference.kind.value, reference.identifier)

    with fetch_template(reference, config=config, runner=runner, cwd=cwd) as snapshot:
        instructions = resolve(snapshot, config.control_filename)
        materialize(snapshot, destination, control_filename=config.control_filename)

    copy_prompts(destination, config.prompts_dir)
    metadata.rewrite(destination, request.identity)

    if request.choices is not None and request.choices.any:
        customize.apply(destination, request.choices)

    return MaterializationResult(
        template_name=reference.identifier,
        project_name=request.identity.name,
        transport_type=determine_transport_type(instructions, reference.identifier),
        config_instructions=instructions,
        project_dir=destination.resolve(),
        kind=reference.kind,
    )
