"""Template resolution and materialization engine."""

from create_mcp.core.classifier import TemplateReference, classify
from create_mcp.core.config import EngineConfig
from create_mcp.core.customize import apply
from create_mcp.core.errors import (
    FetchFailed,
    InstallFailed,
    InstructionsParseFailed,
    MaterializeFailed,
    ScaffoldError,
    TemplateNotFound,
)
from create_mcp.core.fetcher import fetch_template
from create_mcp.core.instructions import (
    ConfigInstructions,
    PlatformInstructions,
    default_instructions,
    determine_transport_type,
    resolve,
)
from create_mcp.core.materializer import copy_prompts, materialize
from create_mcp.core.metadata import rewrite
from create_mcp.core.pipeline import ProjectRequest, create_project
from create_mcp.core.process import CommandRunner, SubprocessRunner, install_dependencies
from create_mcp.core.types import (
    BuiltinTemplate,
    CustomizationChoices,
    MaterializationResult,
    ProjectIdentity,
    SourceKind,
    TransportKind,
)

__all__ = [
    "BuiltinTemplate",
    "CommandRunner",
    "ConfigInstructions",
    "CustomizationChoices",
    "EngineConfig",
    "FetchFailed",
    "InstallFailed",
    "InstructionsParseFailed",
    "MaterializationResult",
    "MaterializeFailed",
    "PlatformInstructions",
    "ProjectIdentity",
    "ProjectRequest",
    "ScaffoldError",
    "SourceKind",
    "SubprocessRunner",
    "TemplateNotFound",
    "TemplateReference",
    "TransportKind",
    "apply",
    "classify",
    "copy_prompts",
    "create_project",
    "default_instructions",
    "determine_transport_type",
    "fetch_template",
    "install_dependencies",
    "materialize",
    "resolve",
    "rewrite",
]
