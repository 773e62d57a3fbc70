"""External command runners."""

from change_project_name.runners.refresh import RefreshRunner

__all__ = ["RefreshRunner"]
