"""Core rename logic."""

from change_project_name.core.discovery import find_source_files
from change_project_name.core.errors import (
    CacheParseError,
    ManifestNotFound,
    RenameError,
    SubprocessFailure,
    UnexpectedIOFailure,
    ValidationError,
)
from change_project_name.core.models import (
    CandidateFile,
    PackageCacheDocument,
    PackageCacheEntry,
    RefreshResult,
    RefreshStepResult,
    RenameRequest,
    RenameState,
    RenameSummary,
)
from change_project_name.core.rewriter import RewriteResult, rewrite_references
from change_project_name.core.validator import is_valid_name

__all__ = [
    "CacheParseError",
    "CandidateFile",
    "ManifestNotFound",
    "PackageCacheDocument",
    "PackageCacheEntry",
    "RefreshResult",
    "RefreshStepResult",
    "RenameError",
    "RenameRequest",
    "RenameState",
    "RenameSummary",
    "RewriteResult",
    "SubprocessFailure",
    "UnexpectedIOFailure",
    "ValidationError",
    "find_source_files",
    "is_valid_name",
    "rewrite_references",
]
