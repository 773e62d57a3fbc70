"""Source file discovery for a project rename."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from change_project_name.core.models import CandidateFile

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".dart"
DEFAULT_EXCLUDED_SEGMENTS = ("build/", ".dart_tool/")


def find_source_files(
    root_dir: Path,
    extension: str = DEFAULT_EXTENSION,
    excluded_segments: Iterable[str] = DEFAULT_EXCLUDED_SEGMENTS,
) -> list[CandidateFile]:
    """Recursively collect source files under ``root_dir``.

    Symbolic links are not followed. A file is skipped when any directory
    between ``root_dir`` and the file matches an excluded segment (given as
    ``"build/"`` or ``"build"``). The result is in traversal order.

    Args:
        root_dir: Project root to walk
        extension: File name suffix to include
        excluded_segments: Directory names that exclude everything below them

    Returns:
        Candidate files, or an empty list if ``root_dir`` does not exist
    """
    if not root_dir.is_dir():
        logger.debug(f"Discovery root {root_dir} does not exist, nothing to scan")
        return []

    excluded = {segment.strip("/") for segment in excluded_segments if segment.strip("/")}
    files: list[CandidateFile] = []

    for dirpath, dirnames, filenames in os.walk(root_dir, followlinks=False):
        # Prune excluded directories so their contents are never visited
        dirnames[:] = [name for name in dirnames if name not in excluded]

        current = Path(dirpath)
        for filename in filenames:
            if not filename.endswith(extension):
                continue
            path = current / filename
            if path.is_symlink():
                continue
            files.append(CandidateFile.from_path(path, root_dir))

    logger.debug(f"Discovered {len(files)} {extension} file(s) under {root_dir}")
    return files
