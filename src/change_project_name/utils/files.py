"""Text file helpers that keep line endings exactly as found on disk."""

from __future__ import annotations

from pathlib import Path


def read_text(path: Path) -> str:
    """Read a UTF-8 file without newline translation."""
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: Path, content: str) -> None:
    """Write a UTF-8 file without newline translation."""
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(content)
