"""Tests for the decoder module."""

import json
import subprocess
from unittest.mock import Mock, patch

import pytest

from replayscan.decoder.models import (
    FloatProp,
    IntProp,
    OtherProp,
    StrProp,
    header_prop_from_json,
    record_from_json,
)
from replayscan.decoder.rrrocket import RrrocketRunner
from replayscan.errors import DecodeError, DecoderNotFoundError


class TestHeaderPropFromJson:
    """Tests for tagging JSON header values."""

    def test_float(self) -> None:
        assert header_prop_from_json(30.0) == FloatProp(30.0)

    def test_int(self) -> None:
        assert header_prop_from_json(150) == IntProp(150)

    def test_bool_is_not_int(self) -> None:
        assert header_prop_from_json(True) == OtherProp(True)

    def test_string(self) -> None:
        assert header_prop_from_json("Stadium_P") == StrProp("Stadium_P")

    def test_array_is_other(self) -> None:
        value = [{"Name": "Player"}]
        assert header_prop_from_json(value) == OtherProp(value)


class TestRecordFromJson:
    """Tests for record_from_json function."""

    def test_reads_properties(self) -> None:
        record = record_from_json(
            {
                "game_type": "TAGame.Replay_Soccar_TA",
                "properties": {"RecordFPS": 30.0, "NumFrames": 150, "MapName": "Park_P"},
            }
        )

        assert record.game_type == "TAGame.Replay_Soccar_TA"
        assert record.get("RecordFPS") == FloatProp(30.0)
        assert record.get("NumFrames") == IntProp(150)
        assert record.get("MapName") == StrProp("Park_P")

    def test_missing_properties(self) -> None:
        record = record_from_json({})
        assert record.properties == {}
        assert record.game_type is None

    def test_malformed_properties(self) -> None:
        record = record_from_json({"properties": ["not", "a", "map"]})
        assert record.properties == {}


@pytest.fixture
def runner() -> RrrocketRunner:
    with patch("replayscan.decoder.rrrocket.shutil.which", return_value="/usr/bin/rrrocket"):
        return RrrocketRunner()


def _completed(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> Mock:
    return Mock(returncode=returncode, stdout=stdout, stderr=stderr)


class TestRrrocketRunner:
    """Tests for RrrocketRunner class."""

    def test_missing_executable(self) -> None:
        with patch("replayscan.decoder.rrrocket.shutil.which", return_value=None):
            with pytest.raises(DecoderNotFoundError):
                RrrocketRunner()

    def test_decode_pipes_bytes_to_stdin(self, runner: RrrocketRunner) -> None:
        output = json.dumps({"properties": {"RecordFPS": 30.0, "NumFrames": 150}}).encode()

        with patch(
            "replayscan.decoder.rrrocket.subprocess.run", return_value=_completed(stdout=output)
        ) as run:
            record = runner.decode(b"replay bytes")

        assert record.get("NumFrames") == IntProp(150)
        args, kwargs = run.call_args
        assert args[0] == ["/usr/bin/rrrocket", "-n"]
        assert kwargs["input"] == b"replay bytes"

    def test_header_only_mode_drops_network_flag(self) -> None:
        with patch("replayscan.decoder.rrrocket.shutil.which", return_value="/usr/bin/rrrocket"):
            runner = RrrocketRunner(network_parse=False)
        assert runner.args == []

    def test_nonzero_exit_raises(self, runner: RrrocketRunner) -> None:
        with patch(
            "replayscan.decoder.rrrocket.subprocess.run",
            return_value=_completed(returncode=1, stderr=b"Crc mismatch"),
        ):
            with pytest.raises(DecodeError, match="Crc mismatch"):
                runner.decode(b"broken")

    def test_invalid_json_raises(self, runner: RrrocketRunner) -> None:
        with patch(
            "replayscan.decoder.rrrocket.subprocess.run",
            return_value=_completed(stdout=b"{not json"),
        ):
            with pytest.raises(DecodeError, match="JSON"):
                runner.decode(b"data")

    def test_timeout_raises(self, runner: RrrocketRunner) -> None:
        with patch(
            "replayscan.decoder.rrrocket.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="rrrocket", timeout=60),
        ):
            with pytest.raises(DecodeError, match="timed out"):
                runner.decode(b"data")

    def test_os_error_raises(self, runner: RrrocketRunner) -> None:
        with patch(
            "replayscan.decoder.rrrocket.subprocess.run",
            side_effect=OSError("Exec format error"),
        ):
            with pytest.raises(DecodeError, match="Could not run rrrocket"):
                runner.decode(b"data")

    def test_empty_input_raises_without_running(self, runner: RrrocketRunner) -> None:
        with patch("replayscan.decoder.rrrocket.subprocess.run") as run:
            with pytest.raises(DecodeError):
                runner.decode(b"")
        run.assert_not_called()
