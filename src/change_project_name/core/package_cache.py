"""Updating the generated package resolution cache.

The cache (``.dart_tool/package_config.json``) mirrors the manifest name in
the entry whose ``rootUri`` points at the project itself. Leaving it stale
makes tooling report a package mismatch until dependencies are fetched again.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pydantic

from change_project_name.core.errors import CacheParseError
from change_project_name.core.models import PackageCacheDocument
from change_project_name.utils.files import read_text, write_text

if TYPE_CHECKING:
    from change_project_name.notifications.base import Notifier

logger = logging.getLogger(__name__)

ROOT_SELF_URI = "../"
JSON_INDENT = 2


def load_package_cache(cache_path: Path) -> tuple[dict[str, Any], PackageCacheDocument]:
    """Parse the cache file and check its shape.

    Returns:
        Tuple of (raw mapping as read, validated document). The raw mapping is
        what gets written back so unrelated keys keep their order and values.

    Raises:
        CacheParseError: If the file is not JSON or not a ``{"packages": [...]}`` object
    """
    try:
        raw = json.loads(read_text(cache_path))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CacheParseError(cache_path, f"invalid JSON ({e})") from e

    if not isinstance(raw, dict):
        raise CacheParseError(cache_path, f"expected an object at top level, got {type(raw).__name__}")

    try:
        document = PackageCacheDocument.model_validate(raw)
    except pydantic.ValidationError as e:
        raise CacheParseError(cache_path, f"unexpected shape ({e.error_count()} error(s))") from e

    return raw, document


def rename_package_cache_entries(
    cache_path: Path,
    old_name: str,
    new_name: str,
    root_uri: str = ROOT_SELF_URI,
    dry_run: bool = False,
) -> bool:
    """Rename the project's own cache entry, raising on a malformed cache.

    Returns:
        True if at least one entry matched (and, unless dry run, was written)

    Raises:
        CacheParseError: If the cache cannot be parsed
        OSError: If reading or writing fails
    """
    raw, document = load_package_cache(cache_path)
    indexes = document.matching_indexes(old_name, root_uri)
    if not indexes:
        logger.debug(f"No entry named {old_name!r} with rootUri {root_uri!r} in {cache_path}")
        return False

    if dry_run:
        return True

    original = read_text(cache_path)
    for index in indexes:
        raw["packages"][index]["name"] = new_name

    serialized = json.dumps(raw, indent=JSON_INDENT, ensure_ascii=False)
    if original.endswith("\n"):
        serialized += "\n"
    write_text(cache_path, serialized)
    logger.debug(f"Renamed {len(indexes)} cache entr{'y' if len(indexes) == 1 else 'ies'} in {cache_path}")
    return True


def update_package_cache(
    cache_path: Path,
    old_name: str,
    new_name: str,
    root_uri: str = ROOT_SELF_URI,
    dry_run: bool = False,
    notifier: Notifier | None = None,
) -> bool:
    """Rename the project's cache entry, never failing the rename.

    A missing cache is a no-op. Parse and I/O failures are logged and
    reported as warnings.

    Returns:
        True if the cache was (or, in dry-run mode, would be) updated
    """
    if not cache_path.is_file():
        logger.debug(f"No package cache at {cache_path}, skipping")
        return False

    try:
        return rename_package_cache_entries(cache_path, old_name, new_name, root_uri, dry_run)
    except (CacheParseError, OSError) as e:
        logger.warning(f"Could not update {cache_path}: {e}")
        if notifier is not None:
            notifier.warning(f"Could not update {cache_path.name}", str(e))
        return False
