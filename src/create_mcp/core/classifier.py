"""Classification of template references into source kinds."""

from __future__ import annotations

from dataclasses import dataclass

from create_mcp.core.config import EngineConfig
from create_mcp.core.types import SourceKind


def classify(reference: str, config: EngineConfig | None = None) -> SourceKind:
    """
    Map a template reference to its source kind.

    Remote-host markers take precedence over everything else; a registered
    built-in name or the reserved built-in prefix comes next; anything else is
    a local path. No filesystem or network access happens here, so a local
    directory named like a built-in template still resolves to the built-in.
    """
    config = config or EngineConfig()
    if any(marker in reference for marker in config.remote_markers):
        return SourceKind.REMOTE_REPOSITORY
    if reference in config.builtin_templates or reference.startswith(config.builtin_prefix):
        return SourceKind.BUILT_IN
    return SourceKind.LOCAL_PATH


@dataclass(frozen=True, kw_only=True)
class TemplateReference:
    """
    A classified template reference.

    Attributes:
        raw: The reference exactly as supplied.
        kind: Source kind decided by ``classify``.
        identifier: Built-in name (prefix stripped), filesystem path or repository URL.
    """

    raw: str
    kind: SourceKind
    identifier: str

    @classmethod
    def parse(cls, reference: str, config: EngineConfig | None = None) -> TemplateReference:
        config = config or EngineConfig()
        kind = classify(reference, config)
        identifier = reference
        if kind is SourceKind.BUILT_IN and reference.startswith(config.builtin_prefix):
            identifier = reference[len(config.builtin_prefix) :]
        return cls(raw=reference, kind=kind, identifier=identifier)
