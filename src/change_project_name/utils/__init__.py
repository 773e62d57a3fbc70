"""Utility modules for change-project-name."""

from change_project_name.utils.files import read_text, write_text
from change_project_name.utils.git import get_tracked_changes, parse_tracked_changes

__all__ = [
    "get_tracked_changes",
    "parse_tracked_changes",
    "read_text",
    "write_text",
]
