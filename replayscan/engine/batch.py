"""Incremental batch processing, one replay per step."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from replayscan.decoder.models import RecordingDecoder
from replayscan.engine.entry import ProcessedEntry, process_file
from replayscan.scanner.filesystem import FileHandle

logger = logging.getLogger(__name__)


@dataclass
class BatchJob:
    """One in-flight scan: the files to decode and the entries produced so far."""

    pending: tuple[FileHandle, ...]
    cursor: int = 0
    completed: list[ProcessedEntry] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.pending)

    @property
    def is_finished(self) -> bool:
        return self.cursor >= len(self.pending)

    @property
    def progress(self) -> float:
        if not self.pending:
            return 1.0
        return self.cursor / len(self.pending)


class BatchProcessor:
    """Decodes a batch of replays incrementally.

    Each call to ``step`` decodes exactly one file, so a caller running a UI
    loop never waits on more than a single replay between redraws.
    """

    def __init__(self, decoder: RecordingDecoder):
        self.decoder = decoder

    def start(self, handles: Sequence[FileHandle]) -> BatchJob:
        job = BatchJob(pending=tuple(handles))
        logger.info("Starting batch of %d replays", job.total)
        return job

    def step(self, job: BatchJob) -> ProcessedEntry | None:
        """Decode the next pending file.

        Returns the new entry, or None without touching the job once every
        file has been processed.
        """
        if job.is_finished:
            return None

        handle = job.pending[job.cursor]
        entry = process_file(handle, self.decoder)
        job.completed.append(entry)
        job.cursor += 1

        logger.debug(
            "[%d/%d] %s%s",
            job.cursor,
            job.total,
            entry.identifier,
            " (corrupt)" if entry.is_corrupt else "",
        )
        if job.is_finished:
            corrupt = sum(1 for e in job.completed if e.is_corrupt)
            logger.info("Finished batch: %d replays, %d corrupt", job.total, corrupt)

        return entry

    def run(self, job: BatchJob) -> list[ProcessedEntry]:
        """Step the job to completion."""
        while self.step(job) is not None:
            pass
        return job.completed
