"""Incremental replay processing."""

from replayscan.engine.batch import BatchJob, BatchProcessor
from replayscan.engine.entry import (
    ProcessedEntry,
    attempt_decode,
    build_entry,
    compute_duration,
    process_file,
)
from replayscan.engine.progress import BatchStats, ProgressReporter

__all__ = [
    "BatchJob",
    "BatchProcessor",
    "BatchStats",
    "ProcessedEntry",
    "ProgressReporter",
    "attempt_decode",
    "build_entry",
    "compute_duration",
    "process_file",
]
