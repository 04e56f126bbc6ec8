"""Non-interactive replay listing."""

from collections.abc import Sequence

import click

from replayscan.decoder.models import FloatProp, HeaderProp, IntProp, OtherProp, Record, StrProp
from replayscan.engine.batch import BatchProcessor
from replayscan.engine.entry import ProcessedEntry
from replayscan.engine.progress import BatchStats, ProgressReporter, format_replay_length
from replayscan.scanner.filesystem import FileHandle

DETAIL_PROPERTIES = [
    ("Name", "ReplayName"),
    ("Map", "MapName"),
    ("Date", "Date"),
    ("Team size", "TeamSize"),
    ("Recorded by", "PlayerName"),
]


def process_all(
    handles: Sequence[FileHandle],
    processor: BatchProcessor,
    reporter: ProgressReporter | None = None,
) -> list[ProcessedEntry]:
    """Decode every handle with a progress bar, one step at a time."""
    reporter = reporter or ProgressReporter()
    stats = BatchStats()
    job = processor.start(handles)

    reporter.report_start(job.total)
    with click.progressbar(length=job.total, file=click.get_text_stream("stderr")) as bar:
        while (entry := processor.step(job)) is not None:
            stats.record(entry)
            bar.update(1)

    reporter.report_completion(stats)
    return job.completed


def format_summary(
    entries: Sequence[ProcessedEntry],
    verbose: bool = False,
    markdown: bool = False,
) -> list[str]:
    if markdown:
        return _format_markdown(entries, verbose)
    return _format_plain(entries, verbose)


def _format_plain(entries: Sequence[ProcessedEntry], verbose: bool) -> list[str]:
    width = max((len(e.identifier) for e in entries), default=0)
    lines = []
    for entry in entries:
        line = f"{entry.identifier:<{width}}  {format_replay_length(entry.duration):>8}"
        if entry.is_corrupt:
            line += "  " + click.style("corrupt", fg="red", bold=True)
        lines.append(line)

        if verbose:
            for label, value in _details(entry):
                lines.append(f"    {click.style(label, bold=True)}: {value}")
    return lines


def _format_markdown(entries: Sequence[ProcessedEntry], verbose: bool) -> list[str]:
    lines = []
    for entry in sorted(entries, key=lambda e: e.identifier.lower()):
        line = f"- **{entry.identifier}** ({format_replay_length(entry.duration)})"
        if entry.is_corrupt:
            line += " _corrupt_"
        lines.append(line)

        if verbose:
            for label, value in _details(entry):
                lines.append(f"  - {label}: {value}")
    return lines


def _details(entry: ProcessedEntry) -> list[tuple[str, str]]:
    if entry.is_corrupt:
        return [("Error", entry.error or "unknown")]
    if entry.record is None:
        return []

    details = []
    for label, name in DETAIL_PROPERTIES:
        value = display_value(entry.record.get(name))
        if value is not None:
            details.append((label, value))

    score = _score(entry.record)
    if score:
        details.append(("Score", score))
    return details


def _score(record: Record) -> str | None:
    blue = display_value(record.get("Team0Score"))
    orange = display_value(record.get("Team1Score"))
    if blue is None and orange is None:
        return None
    return f"{blue or 0} - {orange or 0}"


def display_value(prop: HeaderProp | None) -> str | None:
    match prop:
        case FloatProp(value=value):
            return f"{value:g}"
        case IntProp(value=value):
            return str(value)
        case StrProp(value=value):
            return value
        case OtherProp() | None:
            return None
