"""Filesystem utilities for discovering replay files."""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from replayscan.errors import DirectoryUnreadableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedFilename:
    """Parsed components of a filename."""

    full: str
    base: str
    extension: str | None


@dataclass(frozen=True)
class FileHandle:
    """A replay file captured at scan time."""

    path: Path
    modified_at: float
    size: int

    @property
    def parsed_filename(self) -> ParsedFilename:
        return parse_filename(self.path.name)


def parse_filename(filename: str) -> ParsedFilename:
    if not filename:
        return ParsedFilename(full=filename, base=filename, extension=None)

    dot_index = filename.rfind(".")

    if dot_index <= 0 or dot_index == len(filename) - 1:
        return ParsedFilename(full=filename, base=filename.rstrip("."), extension=None)

    extension = filename[dot_index + 1 :].lower()
    base = filename[:dot_index]

    return ParsedFilename(full=filename, base=base, extension=extension)


def scan_directory(directory: Path, extensions: Iterable[str]) -> list[FileHandle]:
    """List replay files directly inside ``directory``, newest first.

    Only regular files whose extension is in ``extensions`` are kept; an empty
    ``extensions`` keeps files without an extension instead. Files sharing a
    modification time keep the order ``os.scandir`` yields them in, which the
    operating system does not guarantee.

    Raises:
        DirectoryUnreadableError: if ``directory`` cannot be opened.
    """
    wanted = _normalize_extensions(extensions)
    handles: list[FileHandle] = []

    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                handle = _process_entry(entry, wanted)
                if handle:
                    handles.append(handle)
    except FileNotFoundError as e:
        raise DirectoryUnreadableError(directory, "directory does not exist") from e
    except NotADirectoryError as e:
        raise DirectoryUnreadableError(directory, "not a directory") from e
    except PermissionError as e:
        raise DirectoryUnreadableError(directory, "permission denied") from e
    except OSError as e:
        raise DirectoryUnreadableError(directory, str(e)) from e

    handles.sort(key=lambda h: h.modified_at, reverse=True)
    logger.debug("Found %d replay files in %s", len(handles), directory)
    return handles


def _normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    return frozenset(ext.lower().lstrip(".") for ext in extensions)


def _matches_extension(filename: str, wanted: frozenset[str]) -> bool:
    extension = parse_filename(filename).extension
    if not wanted:
        return extension is None
    return extension in wanted


def _process_entry(entry: os.DirEntry, wanted: frozenset[str]) -> FileHandle | None:
    if not _matches_extension(entry.name, wanted):
        return None

    try:
        if not entry.is_file():
            return None
        stat_result = entry.stat()
    except PermissionError:
        logger.warning("Permission denied: %s", entry.path)
        return None
    except FileNotFoundError:
        logger.warning("File disappeared during scan: %s", entry.path)
        return None
    except OSError as e:
        logger.warning("Error reading metadata for %s: %s", entry.path, e)
        return None

    return FileHandle(
        path=Path(entry.path),
        modified_at=stat_result.st_mtime,
        size=stat_result.st_size,
    )
