"""Replay decoding through the rrrocket command-line tool."""

from replayscan.decoder.models import (
    FloatProp,
    HeaderProp,
    IntProp,
    OtherProp,
    Record,
    RecordingDecoder,
    StrProp,
    header_prop_from_json,
    record_from_json,
)
from replayscan.decoder.rrrocket import RrrocketRunner

__all__ = [
    "FloatProp",
    "HeaderProp",
    "IntProp",
    "OtherProp",
    "Record",
    "RecordingDecoder",
    "RrrocketRunner",
    "StrProp",
    "header_prop_from_json",
    "record_from_json",
]
