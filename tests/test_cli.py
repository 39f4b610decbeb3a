"""Integration tests for the create-mcp CLI."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from conftest import write_template
from rich.text import Text
from typer.testing import CliRunner

from create_mcp.cli import app
from create_mcp.core.process import SubprocessRunner
from create_mcp.core.types import BuiltinTemplate

runner = CliRunner()

NON_INTERACTIVE = ["--description", "A test server", "--author", "Tester", "--no-install"]


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    return tmp_path / "test-project"


def _plain(output: str) -> str:
    return Text.from_ansi(output).plain


def _normalized(output: str) -> str:
    return " ".join(_plain(output).split())


class TestCreateCommand:
    @pytest.mark.parametrize("template", list(BuiltinTemplate))
    @pytest.mark.parametrize("lint", [True, False])
    @pytest.mark.parametrize("fmt", [True, False])
    def test_all_builtin_combinations(
        self, tmp_path: Path, template: BuiltinTemplate, lint: bool, fmt: bool
    ) -> None:
        project = tmp_path / f"proj-{template.value}-{lint}-{fmt}"
        result = runner.invoke(
            app,
            [
                str(project),
                "--template",
                template.value,
                *NON_INTERACTIVE,
                "--lint" if lint else "--no-lint",
                "--format" if fmt else "--no-format",
            ],
        )

        assert result.exit_code == 0, result.output
        manifest = json.loads((project / "package.json").read_text())
        assert manifest["name"] == project.name
        assert manifest["description"] == "A test server"
        assert manifest["author"] == "Tester"
        assert (project / ".eslintrc.json").exists() is lint
        assert (project / ".prettierrc").exists() is fmt

    def test_output_shows_done_and_next_steps(self, project_dir: Path) -> None:
        result = runner.invoke(
            app, [str(project_dir), "-t", "basic-stdio", *NON_INTERACTIVE, "--no-customize"]
        )

        assert result.exit_code == 0, result.output
        out = _normalized(result.output)
        assert "Done!" in out
        assert "npm install" in out
        assert "Claude Desktop" in out
        assert "Cursor" in out

    def test_http_template_mentions_url(self, project_dir: Path) -> None:
        result = runner.invoke(
            app, [str(project_dir), "-t", "basic-http", *NON_INTERACTIVE, "--no-customize"]
        )

        assert result.exit_code == 0, result.output
        assert "http://localhost:3000/mcp" in _normalized(result.output)

    def test_local_template_is_not_customized(self, tmp_path: Path, project_dir: Path) -> None:
        template = write_template(tmp_path / "tpl")
        result = runner.invoke(app, [str(project_dir), "-t", str(template), *NON_INTERACTIVE])

        assert result.exit_code == 0, result.output
        assert not (project_dir / ".eslintrc.json").exists()

    def test_missing_template_reports_stage(self, tmp_path: Path, project_dir: Path) -> None:
        result = runner.invoke(
            app, [str(project_dir), "-t", str(tmp_path / "nowhere"), *NON_INTERACTIVE]
        )

        assert result.exit_code == 1
        assert "Error creating project (fetch)" in _normalized(result.output)
        assert not project_dir.exists()

    def test_install_runs_in_project(self, project_dir: Path) -> None:
        with patch.object(SubprocessRunner, "run") as mock_run:
            result = runner.invoke(
                app,
                [
                    str(project_dir),
                    "-t",
                    "basic-stdio",
                    "--description",
                    "d",
                    "--author",
                    "a",
                    "--no-customize",
                ],
            )

        assert result.exit_code == 0, result.output
        mock_run.assert_called_once()
        assert mock_run.call_args.args[0] == ["npm", "install"]
        assert mock_run.call_args.kwargs["cwd"] == project_dir.resolve()


class TestExistingDirectory:
    def test_force_overwrites(self, project_dir: Path) -> None:
        project_dir.mkdir()
        (project_dir / "stale.txt").write_text("old")

        result = runner.invoke(
            app,
            [str(project_dir), "-t", "basic-stdio", *NON_INTERACTIVE, "--no-customize", "--force"],
        )

        assert result.exit_code == 0, result.output
        assert not (project_dir / "stale.txt").exists()
        assert (project_dir / "package.json").exists()

    @patch("builtins.input", return_value="n")
    def test_declined_overwrite_cancels(self, mock_input: MagicMock, project_dir: Path) -> None:
        project_dir.mkdir()
        (project_dir / "stale.txt").write_text("old")

        result = runner.invoke(
            app, [str(project_dir), "-t", "basic-stdio", *NON_INTERACTIVE, "--no-customize"]
        )

        assert result.exit_code == 0
        assert "Operation cancelled." in result.output
        assert (project_dir / "stale.txt").exists()
        mock_input.assert_called_once()


class TestProjectNameValidation:
    @pytest.mark.parametrize("name", [".", "..", "sub/..", "./"])
    def test_current_or_parent_directory_rejected(
        self, name: str, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        work = tmp_path / "work"
        (work / "sub").mkdir(parents=True)
        (work / "precious.txt").write_text("keep me")
        monkeypatch.chdir(work)

        result = runner.invoke(
            app, [name, "-t", "basic-stdio", *NON_INTERACTIVE, "--no-customize", "--force"]
        )

        assert result.exit_code == 1
        assert "Invalid project name" in _normalized(result.output)
        assert (work / "precious.txt").read_text() == "keep me"
        assert not (work / "package.json").exists()

    def test_nested_path_uses_last_segment(self, tmp_path: Path) -> None:
        project = tmp_path / "sub" / "my-srv"
        result = runner.invoke(
            app, [str(project), "-t", "basic-stdio", *NON_INTERACTIVE, "--no-customize"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads((project / "package.json").read_text())["name"] == "my-srv"
        out = _plain(result.output)
        assert '"my-srv": {' in out
        assert f'"{project}": {{' not in out


class TestInteractive:
    @patch("create_mcp.cli._prompts.TerminalMenu")
    @patch("builtins.input", side_effect=["", "", "y", "n"])
    def test_prompts_fill_missing_options(
        self, mock_input: MagicMock, mock_menu_cls: MagicMock, project_dir: Path
    ) -> None:
        mock_menu_cls.return_value.show.return_value = 1  # basic-http

        result = runner.invoke(app, [str(project_dir), "--no-install"])

        assert result.exit_code == 0, result.output
        manifest = json.loads((project_dir / "package.json").read_text())
        assert manifest["description"] == "test-project - A Model Context Protocol server"
        assert manifest["author"] == "posidron"
        assert "express" in manifest["dependencies"]
        assert (project_dir / ".eslintrc.json").exists()
        assert not (project_dir / ".prettierrc").exists()


class TestListTemplates:
    def test_list_templates_exits_zero(self) -> None:
        result = runner.invoke(app, ["unused", "--list-templates"])
        assert result.exit_code == 0

    def test_list_templates_shorthand(self) -> None:
        result = runner.invoke(app, ["-l"])
        assert result.exit_code == 0

    def test_list_templates_shows_all_templates(self) -> None:
        result = runner.invoke(app, ["unused", "--list-templates"])
        out = _normalized(result.output)
        for t in BuiltinTemplate:
            assert t.value in out
            assert " ".join(t.description.split()) in out

    def test_list_templates_does_not_create_directory(self, tmp_path: Path) -> None:
        name = str(tmp_path / "should-not-exist")
        runner.invoke(app, [name, "--list-templates"])
        assert not Path(name).exists()

    def test_help_mentions_options(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        help_text = _plain(result.output)
        assert "--list-templates" in help_text
        assert "--template" in help_text
