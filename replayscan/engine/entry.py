"""Per-file processing results."""

import logging
from dataclasses import dataclass
from pathlib import Path

from replayscan.decoder.models import FloatProp, IntProp, Record, RecordingDecoder
from replayscan.errors import DecodeError
from replayscan.scanner.filesystem import FileHandle

logger = logging.getLogger(__name__)

FPS_PROPERTY = "RecordFPS"
FRAMES_PROPERTY = "NumFrames"


@dataclass
class ProcessedEntry:
    """The outcome of decoding one replay file."""

    identifier: str
    source_path: Path
    modified_at: float = 0.0
    record: Record | None = None
    is_corrupt: bool = False
    error: str | None = None

    @property
    def duration(self) -> float | None:
        """Replay length in seconds, or None when the header does not say."""
        if self.record is None:
            return None
        return compute_duration(self.record)


def compute_duration(record: Record) -> float | None:
    fps: float | None = None
    match record.get(FPS_PROPERTY):
        case FloatProp(value=value):
            fps = value
        case _:
            pass

    frames: int | None = None
    match record.get(FRAMES_PROPERTY):
        case IntProp(value=value):
            frames = value
        case _:
            pass

    if fps is None or frames is None or fps == 0:
        return None
    return frames / fps


def build_entry(handle: FileHandle) -> ProcessedEntry:
    return ProcessedEntry(
        identifier=handle.parsed_filename.base,
        source_path=handle.path,
        modified_at=handle.modified_at,
    )


def attempt_decode(entry: ProcessedEntry, decoder: RecordingDecoder) -> None:
    """Read and decode the entry's file, recording failure instead of raising."""
    try:
        data = entry.source_path.read_bytes()
    except OSError as e:
        logger.warning("Could not read %s: %s", entry.source_path, e)
        _mark_corrupt(entry, f"Failed to read file: {e}")
        return

    try:
        record = decoder.decode(data)
    except DecodeError as e:
        logger.warning("Corrupt replay %s: %s", entry.source_path, e)
        _mark_corrupt(entry, str(e))
        return

    entry.record = record
    entry.is_corrupt = False
    entry.error = None


def process_file(handle: FileHandle, decoder: RecordingDecoder) -> ProcessedEntry:
    entry = build_entry(handle)
    attempt_decode(entry, decoder)
    return entry


def _mark_corrupt(entry: ProcessedEntry, reason: str) -> None:
    entry.record = None
    entry.is_corrupt = True
    entry.error = reason
