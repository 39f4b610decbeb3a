"""Shared fixtures for the create-mcp test suite."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from create_mcp.core.config import DEFAULT_CONTROL_FILENAME, EngineConfig
from create_mcp.core.types import ProjectIdentity

TEMPLATE_README = """\
# Example Template

An example MCP server template.

## Configuration

```json
{
  "mcpServers": {
    "example": "node dist/index.js"
  }
}
```
"""


@dataclass
class FakeRunner:
    """Stands in for ``SubprocessRunner``. A clone writes ``files`` plus a ``.git`` directory."""

    files: dict[str, str] = field(default_factory=dict)
    fail: bool = False
    calls: list[tuple[list[str], Path | None]] = field(default_factory=list)

    def run(
        self,
        args: list[str],
        *,
        cwd: Path | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append((args, cwd))
        if "clone" in args:
            target = Path(args[-1])
            (target / ".git").mkdir(parents=True)
            (target / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
            if self.fail:
                raise subprocess.CalledProcessError(
                    128, args, output="", stderr="fatal: repository not found"
                )
            for rel, content in self.files.items():
                path = target / rel
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content)
        elif self.fail:
            raise subprocess.CalledProcessError(1, args, output="", stderr="npm ERR! boom")
        return subprocess.CompletedProcess(args, 0, "", "")


def write_template(root: Path, *, instructions: str | None = None) -> Path:
    """Create a small template tree under ``root`` and return it."""
    (root / "src").mkdir(parents=True)
    (root / "src" / "index.ts").write_text("console.log('hello');\n")
    manifest = {
        "name": "example-template",
        "version": "1.0.0",
        "description": "template description",
        "author": "template author",
        "scripts": {"build": "tsc", "lint": "custom-lint"},
        "devDependencies": {"typescript": "^5.4.3"},
    }
    (root / "package.json").write_text(json.dumps(manifest, indent=2))
    (root / "README.md").write_text(TEMPLATE_README)
    if instructions is not None:
        (root / DEFAULT_CONTROL_FILENAME).write_text(instructions)
    return root


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    return write_template(tmp_path / "my-template")


@pytest.fixture
def identity() -> ProjectIdentity:
    return ProjectIdentity(name="my-cool-server", description="X", author="A")


@pytest.fixture
def config(tmp_path: Path) -> EngineConfig:
    """Default config with clones and prompts kept inside ``tmp_path``."""
    return EngineConfig(temp_root=tmp_path / "tmp", prompts_dir=tmp_path / "no-prompts")


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner(files={"package.json": '{"name": "remote"}', "README.md": "# Remote\n"})
