"""Typed views over the generated project's manifest and README.

Both documents follow the same cycle: ``load`` parses the file, methods edit
the in-memory model, ``dump`` serializes it back.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

MANIFEST_FILENAME = "package.json"
README_FILENAME = "README.md"


@dataclass
class Manifest:
    """``package.json`` as an ordered mapping. Untouched keys keep their position."""

    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path) -> Manifest:
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a JSON object, got {type(data).__name__}.")
        return cls(data=data)

    def dump(self, path: Path) -> None:
        path.write_text(json.dumps(self.data, indent=2) + "\n", encoding="utf-8")

    def set_fields(self, **values: str) -> None:
        for key, value in values.items():
            self.data[key] = value

    def section(self, key: str) -> dict[str, Any]:
        """Return the object stored under ``key``, creating it when absent."""
        value = self.data.get(key)
        if not isinstance(value, dict):
            value = {}
            self.data[key] = value
        return value

    def merge(self, key: str, entries: dict[str, str], *, keep_existing: bool = False) -> None:
        """
        Merge ``entries`` into the object under ``key``.

        With ``keep_existing`` an entry already present is left as it is;
        otherwise it is overwritten. Nothing is ever removed.
        """
        target = self.section(key)
        for name, value in entries.items():
            if keep_existing and name in target:
                continue
            target[name] = value


_HEADING_RE = re.compile(r"^#")
_FENCE_RE = re.compile(r"^\s*(```|~~~)")
_INLINE_ENTRY_RE = re.compile(r'^(?P<indent>\s*)"[^"]+":\s*"[^"]+"(?P<comma>,?)\s*$')
_SERVERS_KEY_RE = re.compile(r'"(mcpServers|servers)"\s*:')


@dataclass
class Readme:
    """
    README as a list of lines.

    Every edit touches the first matching line only and reports whether it
    found one, so a README without the expected shape is left unchanged.
    """

    lines: list[str] = field(default_factory=list)
    trailing_newline: bool = True

    @classmethod
    def parse(cls, text: str) -> Readme:
        return cls(lines=text.splitlines(), trailing_newline=text.endswith("\n"))

    @classmethod
    def load(cls, path: Path) -> Readme:
        return cls.parse(path.read_text(encoding="utf-8"))

    def render(self) -> str:
        text = "\n".join(self.lines)
        return text + "\n" if self.trailing_newline and self.lines else text

    def dump(self, path: Path) -> None:
        path.write_text(self.render(), encoding="utf-8")

    def _scan(self) -> list[tuple[int, str, bool]]:
        """Return ``(index, line, inside_fence)`` for every line that is not a fence marker."""
        out: list[tuple[int, str, bool]] = []
        in_fence = False
        for i, line in enumerate(self.lines):
            if _FENCE_RE.match(line):
                in_fence = not in_fence
                continue
            out.append((i, line, in_fence))
        return out

    def replace_heading(self, title: str) -> bool:
        for i, line, in_fence in self._scan():
            if not in_fence and _HEADING_RE.match(line):
                self.lines[i] = f"# {title}"
                return True
        return False

    def replace_summary(self, summary: str) -> bool:
        """Replace the first non-empty, non-heading line outside code blocks."""
        for i, line, in_fence in self._scan():
            if not in_fence and line.strip() and not _HEADING_RE.match(line):
                self.lines[i] = summary
                return True
        return False

    def _fenced_blocks(self) -> list[list[int]]:
        """Line indices of each code block's body, in document order."""
        blocks: list[list[int]] = []
        current: list[int] | None = None
        for i, _, in_fence in self._scan():
            if not in_fence:
                current = None
                continue
            if current is None or current[-1] != i - 1:
                current = []
                blocks.append(current)
            current.append(i)
        return blocks

    def replace_server_entry(self, stanza: list[str]) -> bool:
        """
        Replace the first ``"key": "value"`` line of a server configuration block.

        Only code blocks declaring ``mcpServers`` or ``servers`` count; other
        JSON examples are left alone. The stanza is indented like the replaced
        line and keeps its trailing comma.
        """
        for body in self._fenced_blocks():
            if not any(_SERVERS_KEY_RE.search(self.lines[i]) for i in body):
                continue
            for i in body:
                match = _INLINE_ENTRY_RE.match(self.lines[i])
                if match is None:
                    continue
                indent, comma = match.group("indent"), match.group("comma")
                block = [indent + s for s in stanza]
                block[-1] += comma
                self.lines[i : i + 1] = block
                return True
        return False
