"""Core data models for a project rename."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from change_project_name.core.validator import is_valid_name


class RenameState(str, Enum):
    """Stage of a rename transaction."""

    IDLE = "idle"
    UPDATING_MANIFEST = "updating_manifest"
    UPDATING_IMPORTS = "updating_imports"
    UPDATING_PLATFORM_IDS = "updating_platform_ids"
    UPDATING_CACHE = "updating_cache"
    DONE = "done"
    FAILED = "failed"


# =============================================================================
# Request Models
# =============================================================================


class RenameRequest(BaseModel):
    """A single rename invocation."""

    model_config = ConfigDict(frozen=True)

    old_name: str = Field(min_length=1)
    new_name: str
    dry_run: bool = False
    verbose: bool = False

    @field_validator("new_name")
    @classmethod
    def _check_new_name(cls, value: str) -> str:
        if not is_valid_name(value):
            raise ValueError(f"invalid package name: {value!r}")
        return value

    @property
    def is_noop(self) -> bool:
        """True when the project already carries the requested name."""
        return self.old_name == self.new_name


@dataclass(frozen=True)
class CandidateFile:
    """A source file picked up by discovery."""

    absolute_path: Path
    relative_path: str

    @classmethod
    def from_path(cls, path: Path, root_dir: Path) -> CandidateFile:
        """Build a candidate, stripping the project-root prefix."""
        relative = path.relative_to(root_dir).as_posix()
        return cls(absolute_path=path, relative_path=f"./{relative}")


# =============================================================================
# Package Cache Models
# =============================================================================


class PackageCacheEntry(BaseModel):
    """One entry of the package cache's ``packages`` array.

    Only ``name`` and ``rootUri`` are inspected. Every other key is kept.
    Values are not type-checked here so that an odd entry elsewhere in the
    array cannot reject the whole document.
    """

    model_config = ConfigDict(extra="allow")

    name: Any = None
    root_uri: Any = Field(default=None, alias="rootUri")


class PackageCacheDocument(BaseModel):
    """Top-level shape of the package cache: ``{"packages": [...], ...}``."""

    model_config = ConfigDict(extra="allow")

    packages: list[PackageCacheEntry]

    def matching_indexes(self, name: str, root_uri: str) -> list[int]:
        """Indexes of entries that describe the project itself under ``name``."""
        return [
            index
            for index, entry in enumerate(self.packages)
            if entry.root_uri == root_uri and entry.name == name
        ]


# =============================================================================
# Result Models
# =============================================================================


@dataclass
class RefreshStepResult:
    """Outcome of one refresh command."""

    command: list[str]
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass
class RefreshResult:
    """Outcome of the clean + fetch refresh pipeline.

    ``fetch`` is None when the clean step failed and the gate stopped the
    pipeline.
    """

    clean: RefreshStepResult
    fetch: RefreshStepResult | None = None

    @property
    def succeeded(self) -> bool:
        return self.clean.succeeded and self.fetch is not None and self.fetch.succeeded


@dataclass
class RenameSummary:
    """What a rename changed, or would change in dry-run mode."""

    dry_run: bool = False
    manifest_updated: bool = False
    files_changed: list[str] = field(default_factory=list)
    occurrences: dict[str, int] = field(default_factory=dict)
    platform_files_updated: list[str] = field(default_factory=list)
    cache_updated: bool = False
    refresh: RefreshResult | None = None

    @property
    def changed_count(self) -> int:
        return len(self.files_changed)
