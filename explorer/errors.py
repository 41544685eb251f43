from __future__ import annotations

from typing import Optional


class ExplorerError(Exception):
    """Base class for failures that are shown to the user instead of crashing."""


class IOFailure(ExplorerError):
    """A directory, file or temp file could not be read or written."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class FileTooLarge(ExplorerError):
    def __init__(self, path: str, size: int, limit: int) -> None:
        super().__init__(
            f"file too large ({size} bytes), maximum allowed is {limit} bytes"
        )
        self.path = path
        self.size = size
        self.limit = limit


class CommandFailure(ExplorerError):
    """A shell command exited non-zero or could not be started."""

    def __init__(self, message: str, command: str = "") -> None:
        super().__init__(message)
        self.command = command
