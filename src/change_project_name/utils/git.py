"""Git working tree checks run before a rename."""

from __future__ import annotations

import subprocess
from pathlib import Path


def parse_tracked_changes(output: str) -> list[str]:
    """Return paths with tracked changes from ``git status --porcelain`` output.

    Untracked entries (``??``) are ignored. For renames and copies the new
    path is returned.
    """
    changed: list[str] = []
    for line in output.splitlines():
        if len(line) < 4 or line.startswith("??"):
            continue
        path = line[3:]
        if " -> " in path:
            path = path.split(" -> ", 1)[1]
        changed.append(path)
    return changed


def get_tracked_changes(project_root: Path) -> list[str] | None:
    """List tracked files with uncommitted changes.

    Returns:
        Changed paths, or None when git is unavailable or the directory is
        not a work tree
    """
    try:
        result = subprocess.run(
            ["git", "status", "--porcelain"],
            capture_output=True,
            text=True,
            cwd=project_root,
            timeout=10,
            check=False,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None

    if result.returncode != 0:
        return None
    return parse_tracked_changes(result.stdout)
