"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from change_project_name import __version__
from change_project_name.cli import app

runner = CliRunner()


def _invoke(project: Path, *args: str, input: str | None = None):
    return runner.invoke(
        app,
        ["--project-dir", str(project), "--no-refresh", "--yes", *args],
        input=input,
    )


class TestArguments:
    """Argument handling and validation."""

    def test_no_arguments_shows_help(self) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "Usage" in result.output
        assert "change-project-name --dry-run --value my_new_app" in result.output

    def test_flags_without_name_are_an_error(self, project: Path, snapshot) -> None:
        before = snapshot(project)

        result = runner.invoke(app, ["--project-dir", str(project), "--dry-run"])

        assert result.exit_code == 1
        assert "cannot be empty" in result.output
        assert "Usage" not in result.output
        assert snapshot(project) == before

    def test_single_flag_in_project_dir_is_an_error(
        self, project: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(project)

        result = runner.invoke(app, ["--dry-run"])

        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_missing_manifest(self, tmp_path: Path) -> None:
        result = _invoke(tmp_path, "new_app")
        assert result.exit_code == 1
        assert "pubspec.yaml not found" in result.output

    def test_manifest_without_name(self, tmp_path: Path) -> None:
        (tmp_path / "pubspec.yaml").write_text("description: nameless\n", encoding="utf-8")
        result = _invoke(tmp_path, "new_app")
        assert result.exit_code == 1
        assert "Could not find" in result.output

    @pytest.mark.parametrize("name", ["NewApp", "new-app", "2app", "_app"])
    def test_invalid_name(self, project: Path, snapshot, name: str) -> None:
        before = snapshot(project)

        result = _invoke(project, "--value", name)

        assert result.exit_code == 1
        assert "Invalid package name" in result.output
        assert snapshot(project) == before

    def test_empty_interactive_name(self, project: Path) -> None:
        result = _invoke(project, "--interactive", input="\n")
        assert result.exit_code == 1
        assert "cannot be empty" in result.output

    def test_same_name_is_noop(self, project: Path, snapshot) -> None:
        before = snapshot(project)

        result = _invoke(project, "old_app")

        assert result.exit_code == 0
        assert 'already "old_app"' in result.output
        assert snapshot(project) == before


class TestRename:
    """Renames driven through the CLI."""

    def test_positional_name(self, project: Path) -> None:
        result = _invoke(project, "new_app")

        assert result.exit_code == 0, result.output
        assert "Current project name: old_app" in result.output
        assert "name: new_app" in (project / "pubspec.yaml").read_text(encoding="utf-8")
        assert "package:new_app/x.dart" in (project / "lib" / "main.dart").read_text(encoding="utf-8")

    def test_value_takes_priority_over_positional(self, project: Path) -> None:
        result = _invoke(project, "--value", "from_value", "from_positional")

        assert result.exit_code == 0, result.output
        assert "name: from_value" in (project / "pubspec.yaml").read_text(encoding="utf-8")

    def test_interactive_prompt(self, project: Path) -> None:
        result = _invoke(project, "--interactive", input="prompted_app\n")

        assert result.exit_code == 0, result.output
        assert "name: prompted_app" in (project / "pubspec.yaml").read_text(encoding="utf-8")

    def test_dry_run(self, project: Path, package_config: Path, snapshot) -> None:
        before = snapshot(project)

        result = _invoke(project, "--dry-run", "--value", "new_app")

        assert result.exit_code == 0, result.output
        assert snapshot(project) == before
        assert "Would update: ./lib/main.dart" in result.output
        assert "Would update: ./lib/x.dart" in result.output
        assert "would be updated" in result.output

    def test_updates_package_cache(self, project: Path, package_config: Path) -> None:
        result = _invoke(project, "new_app")

        assert result.exit_code == 0, result.output
        data = json.loads(package_config.read_text(encoding="utf-8"))
        assert data["packages"][1]["name"] == "new_app"

    def test_platform_ids_flag(self, project: Path) -> None:
        gradle = project / "android" / "app" / "build.gradle"
        gradle.parent.mkdir(parents=True)
        gradle.write_text('applicationId "com.example.old_app"\n', encoding="utf-8")

        result = _invoke(project, "--platform-ids", "new_app")

        assert result.exit_code == 0, result.output
        assert 'applicationId "com.example.new_app"' in gradle.read_text(encoding="utf-8")

    def test_fatal_error_exits_1(self, project: Path) -> None:
        with patch(
            "change_project_name.core.renamer.write_text",
            side_effect=PermissionError("read-only"),
        ):
            result = _invoke(project, "new_app")

        assert result.exit_code == 1
        assert "An error occurred during project rename" in result.output


class TestDirtyWorkingTree:
    """Confirmation before renaming with uncommitted changes."""

    def test_declined_confirmation_aborts(self, project: Path, snapshot) -> None:
        before = snapshot(project)

        with patch("change_project_name.cli.get_tracked_changes", return_value=["lib/main.dart"]):
            result = runner.invoke(
                app,
                ["--project-dir", str(project), "--no-refresh", "new_app"],
                input="n\n",
            )

        assert result.exit_code == 0
        assert "Uncommitted changes" in result.output
        assert "Aborted" in result.output
        assert snapshot(project) == before

    def test_accepted_confirmation_proceeds(self, project: Path) -> None:
        with patch("change_project_name.cli.get_tracked_changes", return_value=["lib/main.dart"]):
            result = runner.invoke(
                app,
                ["--project-dir", str(project), "--no-refresh", "new_app"],
                input="y\n",
            )

        assert result.exit_code == 0, result.output
        assert "name: new_app" in (project / "pubspec.yaml").read_text(encoding="utf-8")

    def test_clean_tree_does_not_prompt(self, project: Path) -> None:
        with patch("change_project_name.cli.get_tracked_changes", return_value=[]):
            result = runner.invoke(app, ["--project-dir", str(project), "--no-refresh", "new_app"])

        assert result.exit_code == 0, result.output
        assert "Uncommitted changes" not in result.output

    def test_dry_run_skips_check(self, project: Path) -> None:
        with patch("change_project_name.cli.get_tracked_changes") as mock_changes:
            result = runner.invoke(app, ["--project-dir", str(project), "--dry-run", "new_app"])

        assert result.exit_code == 0, result.output
        mock_changes.assert_not_called()
