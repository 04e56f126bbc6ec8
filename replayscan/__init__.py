"""Replay Scan - browse a directory of Rocket League replays from the terminal."""

__version__ = "0.1.0"

from replayscan.engine import BatchProcessor, ProcessedEntry
from replayscan.scanner import scan_directory

__all__ = ["BatchProcessor", "ProcessedEntry", "scan_directory"]
