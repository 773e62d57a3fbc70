"""Error kinds raised during a project rename."""

from __future__ import annotations

from pathlib import Path


class RenameError(Exception):
    """Base exception for rename failures."""


class ValidationError(RenameError):
    """The new name is invalid or the manifest does not declare a name."""


class ManifestNotFound(RenameError):
    """The project manifest does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Manifest not found at {path}")
        self.path = path


class CacheParseError(RenameError):
    """The package cache could not be parsed into the expected shape."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Could not parse {path}: {reason}")
        self.path = path
        self.reason = reason


class SubprocessFailure(RenameError):
    """A refresh command exited with a non-zero status."""

    def __init__(self, command: list[str], exit_code: int) -> None:
        super().__init__(f"Command failed with exit code {exit_code}: {' '.join(command)}")
        self.command = command
        self.exit_code = exit_code


class UnexpectedIOFailure(RenameError):
    """Reading or writing a project file failed."""

    def __init__(self, path: Path, cause: OSError | UnicodeError) -> None:
        super().__init__(f"I/O failure on {path}: {cause}")
        self.path = path
        self.cause = cause
