"""Exceptions raised by replayscan."""

from pathlib import Path


class ScanError(Exception):
    """Raised when a replay directory cannot be listed."""


class DirectoryUnreadableError(ScanError):
    """Raised when the replay directory is missing or cannot be opened."""

    def __init__(self, directory: Path, reason: str):
        super().__init__(f"Cannot read replay directory {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class DecodeError(Exception):
    """Raised when a replay cannot be decoded."""


class DecoderNotFoundError(Exception):
    """Raised when the rrrocket executable is not installed."""
