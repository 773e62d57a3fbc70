"""Package name validation."""

from __future__ import annotations

import re

# Lowercase letter first, then lowercase letters, digits or underscores.
PACKAGE_NAME_PATTERN = re.compile(r"[a-z][a-z0-9_]*")


def is_valid_name(name: str) -> bool:
    """Check a proposed package name against the Dart naming rules."""
    return PACKAGE_NAME_PATTERN.fullmatch(name) is not None
