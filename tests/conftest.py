"""Shared fixtures for change-project-name tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from change_project_name.config import Config, RefreshConfig
from change_project_name.notifications.base import RecordingNotifier

PUBSPEC = """\
name: old_app
description: A new Flutter project.
version: 1.0.0+1

environment:
  sdk: ">=3.0.0 <4.0.0"

dependencies:
  flutter:
    sdk: flutter
"""

PACKAGE_CONFIG = {
    "configVersion": 2,
    "packages": [
        {
            "name": "collection",
            "rootUri": "file:///home/dev/.pub-cache/hosted/pub.dev/collection-1.18.0",
            "packageUri": "lib/",
            "languageVersion": "2.18",
        },
        {
            "name": "old_app",
            "rootUri": "../",
            "packageUri": "lib/",
            "languageVersion": "3.0",
        },
    ],
    "generated": "2024-01-01T00:00:00.000000Z",
    "generator": "pub",
    "generatorVersion": "3.2.0",
}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create a minimal Flutter project named old_app."""
    (tmp_path / "pubspec.yaml").write_text(PUBSPEC, encoding="utf-8")

    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "main.dart").write_text(
        "import 'package:flutter/material.dart';\nimport 'package:old_app/x.dart';\n\nvoid main() {}\n",
        encoding="utf-8",
    )
    (lib / "x.dart").write_text("import 'package:old_app/y.dart';\n\nclass X {}\n", encoding="utf-8")
    (lib / "y.dart").write_text("class Y {}\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def package_config(project: Path) -> Path:
    """Add a .dart_tool/package_config.json to the project."""
    path = project / ".dart_tool" / "package_config.json"
    path.parent.mkdir()
    path.write_text(json.dumps(PACKAGE_CONFIG, indent=2) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def config() -> Config:
    """Default config with the dependency refresh disabled."""
    return Config(refresh=RefreshConfig(enabled=False))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def _snapshot(root: Path) -> dict[str, bytes]:
    return {path.relative_to(root).as_posix(): path.read_bytes() for path in sorted(root.rglob("*")) if path.is_file()}


@pytest.fixture
def snapshot():
    """Function mapping every file under a root to its bytes."""
    return _snapshot
