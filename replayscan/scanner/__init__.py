"""Scanner module for replay discovery."""

from .filesystem import FileHandle, ParsedFilename, parse_filename, scan_directory

__all__ = [
    "FileHandle",
    "ParsedFilename",
    "parse_filename",
    "scan_directory",
]
