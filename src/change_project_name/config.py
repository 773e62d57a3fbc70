"""Configuration management for change-project-name."""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

CONFIG_DIR_NAME = ".change-project-name"
CONFIG_FILE_NAME = "config.yaml"


class RefreshConfig(BaseModel):
    """Post-update dependency refresh settings."""

    enabled: bool = Field(default=True, description="Run clean + pub get after the package cache is rewritten")
    command: str = Field(default="flutter", description="Executable used for the refresh steps")
    clean_args: list[str] = Field(default_factory=lambda: ["clean"], description="Arguments for the clean step")
    fetch_args: list[str] = Field(default_factory=lambda: ["pub", "get"], description="Arguments for the fetch step")


class Config(BaseModel):
    """Rename configuration.

    Path fields are relative to the project root, which is always passed
    explicitly to the renamer.
    """

    manifest_file: str = Field(default="pubspec.yaml", description="Manifest declaring the project name")
    source_extension: str = Field(default=".dart", description="Extension of source files to rewrite")
    excluded_segments: list[str] = Field(
        default_factory=lambda: ["build/", ".dart_tool/"],
        description="Path segments that exclude a file from discovery",
    )
    package_cache_file: str = Field(
        default=".dart_tool/package_config.json",
        description="Generated package resolution cache",
    )
    root_self_uri: str = Field(default="../", description="rootUri marking the project's own cache entry")
    update_platform_ids: bool = Field(
        default=False,
        description="Also rewrite the Android applicationId and iOS bundle identifier",
    )
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)

    @classmethod
    def load(cls, config_path: Path | None = None, project_root: Path | None = None) -> Config:
        """Load configuration from file or use defaults."""
        if config_path is None:
            root = project_root if project_root is not None else Path.cwd()
            config_path = root / CONFIG_DIR_NAME / CONFIG_FILE_NAME

        if config_path.exists():
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
            return cls.model_validate(data)

        return cls()

    def save(self, config_path: Path) -> None:
        """Save configuration to file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open("w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)
