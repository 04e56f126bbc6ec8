"""Shared fixtures for replayscan tests."""

import json
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from replayscan.decoder.models import Record, record_from_json
from replayscan.errors import DecodeError


class FakeDecoder:
    """Decodes JSON replay fixtures; anything that is not JSON is corrupt."""

    def __init__(self) -> None:
        self.calls = 0

    def decode(self, data: bytes) -> Record:
        self.calls += 1
        try:
            payload = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Not a replay: {e}") from e
        return record_from_json(payload)


@pytest.fixture
def decoder() -> FakeDecoder:
    return FakeDecoder()


@pytest.fixture
def make_replay() -> Callable[..., Path]:
    """Factory writing a replay fixture with the given header and mtime."""

    def _make(
        directory: Path,
        name: str,
        properties: dict | None = None,
        mtime: float | None = None,
        corrupt: bool = False,
    ) -> Path:
        path = directory / name
        if corrupt:
            path.write_bytes(b"\x00\x01 not a replay")
        else:
            path.write_text(json.dumps({"properties": properties or {}}))
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make
