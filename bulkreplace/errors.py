from __future__ import annotations

from pathlib import Path


class ReplaceError(Exception):
    """Base class for everything the replace core raises on purpose."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class PlatformUnavailable(ReplaceError):
    pass


class ResolutionError(ReplaceError):
    pass


class InvalidPattern(ReplaceError):
    pass


class ConfigurationError(ReplaceError, ValueError):
    pass


class FileOperationError(ReplaceError):
    def __init__(self, path: Path, operation: str, reason: str) -> None:
        super().__init__(f"Cannot {operation} {path}: {reason}")
        self.path = path
        self.operation = operation
