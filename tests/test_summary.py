"""Tests for the non-interactive summary."""

from pathlib import Path

import click

from replayscan.decoder.models import FloatProp, IntProp, OtherProp, Record, StrProp
from replayscan.engine.batch import BatchProcessor
from replayscan.engine.entry import ProcessedEntry
from replayscan.engine.progress import format_elapsed, format_replay_length
from replayscan.scanner.filesystem import scan_directory
from replayscan.summary import display_value, format_summary, process_all


def _entry(name: str, frames: int | None = 1800, corrupt: bool = False, **extra) -> ProcessedEntry:
    if corrupt:
        return ProcessedEntry(
            identifier=name,
            source_path=Path(f"{name}.replay"),
            is_corrupt=True,
            error="Crc mismatch",
        )
    properties = {"RecordFPS": FloatProp(30.0), **extra}
    if frames is not None:
        properties["NumFrames"] = IntProp(frames)
    return ProcessedEntry(
        identifier=name,
        source_path=Path(f"{name}.replay"),
        record=Record(properties=properties),
    )


class TestFormatSummary:
    """Tests for format_summary function."""

    def test_plain_keeps_order(self) -> None:
        lines = format_summary([_entry("zeta"), _entry("alpha", frames=None)])

        assert lines[0].startswith("zeta")
        assert "1:00" in lines[0]
        assert lines[1].startswith("alpha")
        assert "unknown" in lines[1]

    def test_plain_marks_corrupt(self) -> None:
        lines = format_summary([_entry("broken", corrupt=True)])
        assert "corrupt" in click.unstyle(lines[0])

    def test_markdown_is_alphabetical(self) -> None:
        lines = format_summary([_entry("zeta"), _entry("Alpha"), _entry("mid")], markdown=True)

        assert lines == [
            "- **Alpha** (1:00)",
            "- **mid** (1:00)",
            "- **zeta** (1:00)",
        ]

    def test_markdown_verbose_details(self) -> None:
        entry = _entry(
            "final",
            MapName=StrProp("Stadium_P"),
            TeamSize=IntProp(3),
            Team0Score=IntProp(2),
        )

        lines = format_summary([entry], verbose=True, markdown=True)

        assert lines[0] == "- **final** (1:00)"
        assert "  - Map: Stadium_P" in lines
        assert "  - Team size: 3" in lines
        assert "  - Score: 2 - 0" in lines

    def test_verbose_corrupt_shows_error(self) -> None:
        lines = format_summary([_entry("broken", corrupt=True)], verbose=True)
        assert any("Crc mismatch" in click.unstyle(line) for line in lines)


class TestDisplayValue:
    """Tests for display_value function."""

    def test_values(self) -> None:
        assert display_value(FloatProp(30.0)) == "30"
        assert display_value(IntProp(3)) == "3"
        assert display_value(StrProp("Park_P")) == "Park_P"
        assert display_value(OtherProp([1])) is None
        assert display_value(None) is None


class TestFormatting:
    """Tests for duration formatting helpers."""

    def test_replay_length(self) -> None:
        assert format_replay_length(5.0) == "0:05"
        assert format_replay_length(330.4) == "5:30"
        assert format_replay_length(3_725) == "1:02:05"
        assert format_replay_length(None) == "unknown"

    def test_elapsed(self) -> None:
        assert format_elapsed(5) == "5s"
        assert format_elapsed(125) == "2m 5s"
        assert format_elapsed(3_725) == "1h 2m 5s"


class TestProcessAll:
    """Tests for process_all function."""

    def test_processes_every_file(self, tmp_path: Path, make_replay, decoder) -> None:
        make_replay(tmp_path, "a.replay", {"RecordFPS": 30.0, "NumFrames": 60}, mtime=2_000)
        make_replay(tmp_path, "b.replay", corrupt=True, mtime=1_000)

        entries = process_all(scan_directory(tmp_path, {"replay"}), BatchProcessor(decoder))

        assert [e.identifier for e in entries] == ["a", "b"]
        assert [e.is_corrupt for e in entries] == [False, True]

    def test_empty_batch(self, decoder) -> None:
        assert process_all([], BatchProcessor(decoder)) == []
