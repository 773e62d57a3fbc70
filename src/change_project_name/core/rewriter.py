"""Rewriting of ``package:`` import references."""

from __future__ import annotations

from typing import NamedTuple

REFERENCE_PREFIX = "package:"


class RewriteResult(NamedTuple):
    """Outcome of rewriting one file's text."""

    new_content: str
    occurrence_count: int
    changed: bool


def reference_marker(name: str) -> str:
    """Return the import marker for a package name, e.g. ``package:my_app``."""
    return f"{REFERENCE_PREFIX}{name}"


def rewrite_references(content: str, old_name: str, new_name: str) -> RewriteResult:
    """Replace every ``package:<old_name>`` with ``package:<new_name>``.

    This is a literal substring match with no word boundary, so
    ``package:app`` also matches inside ``package:app_utils``.

    Args:
        content: File text
        old_name: Current package name
        new_name: Replacement package name

    Returns:
        RewriteResult; ``content`` is returned untouched when nothing matched
    """
    old_marker = reference_marker(old_name)
    count = content.count(old_marker)
    if count == 0:
        return RewriteResult(content, 0, False)

    return RewriteResult(content.replace(old_marker, reference_marker(new_name)), count, True)
