"""Unit tests for copying template snapshots."""

from __future__ import annotations

from pathlib import Path

import pytest

from create_mcp.core.config import DEFAULT_CONTROL_FILENAME
from create_mcp.core.errors import MaterializeFailed
from create_mcp.core.materializer import copy_prompts, materialize


class TestMaterialize:
    def test_copies_tree(self, template_dir: Path, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        materialize(template_dir, dest)

        assert (dest / "package.json").read_text() == (template_dir / "package.json").read_text()
        assert (dest / "src" / "index.ts").is_file()

    def test_excludes_control_file(self, tmp_path: Path) -> None:
        snapshot = tmp_path / "snap"
        (snapshot / "nested").mkdir(parents=True)
        (snapshot / DEFAULT_CONTROL_FILENAME).write_text("{}")
        (snapshot / "nested" / DEFAULT_CONTROL_FILENAME).write_text("{}")
        (snapshot / "keep.txt").write_text("keep")

        dest = tmp_path / "out"
        materialize(snapshot, dest)

        assert (dest / "keep.txt").is_file()
        assert not (dest / DEFAULT_CONTROL_FILENAME).exists()
        assert not (dest / "nested" / DEFAULT_CONTROL_FILENAME).exists()

    def test_only_exact_name_is_excluded(self, tmp_path: Path) -> None:
        snapshot = tmp_path / "snap"
        snapshot.mkdir()
        (snapshot / f"{DEFAULT_CONTROL_FILENAME}.bak").write_text("{}")

        dest = tmp_path / "out"
        materialize(snapshot, dest)

        assert (dest / f"{DEFAULT_CONTROL_FILENAME}.bak").is_file()

    def test_custom_control_filename(self, tmp_path: Path) -> None:
        snapshot = tmp_path / "snap"
        snapshot.mkdir()
        (snapshot / "private.json").write_text("{}")
        (snapshot / DEFAULT_CONTROL_FILENAME).write_text("{}")

        dest = tmp_path / "out"
        materialize(snapshot, dest, control_filename="private.json")

        assert not (dest / "private.json").exists()
        assert (dest / DEFAULT_CONTROL_FILENAME).exists()

    def test_merges_into_existing_destination(self, template_dir: Path, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        dest.mkdir()
        (dest / "existing.txt").write_text("already here")

        materialize(template_dir, dest)

        assert (dest / "existing.txt").read_text() == "already here"
        assert (dest / "README.md").is_file()

    def test_copy_failure_names_stage(self, template_dir: Path, tmp_path: Path) -> None:
        dest = tmp_path / "out"
        dest.write_text("a file, not a directory")

        with pytest.raises(MaterializeFailed) as exc_info:
            materialize(template_dir, dest)

        assert exc_info.value.stage == "materialize"
        assert isinstance(exc_info.value.__cause__, OSError)


class TestCopyPrompts:
    def test_copies_when_present(self, tmp_path: Path) -> None:
        prompts = tmp_path / "prompts"
        prompts.mkdir()
        (prompts / "guide.md").write_text("# Guide\n")
        dest = tmp_path / "project"
        dest.mkdir()

        assert copy_prompts(dest, prompts) is True
        assert (dest / "prompts" / "guide.md").read_text() == "# Guide\n"

    def test_noop_when_absent(self, tmp_path: Path) -> None:
        dest = tmp_path / "project"
        dest.mkdir()

        assert copy_prompts(dest, tmp_path / "missing") is False
        assert not (dest / "prompts").exists()
