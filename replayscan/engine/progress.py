"""Progress reporting utilities for batch processing."""

import time
from dataclasses import dataclass, field

import click

from replayscan.engine.entry import ProcessedEntry


@dataclass
class BatchStats:
    """Statistics for a batch run."""

    files_processed: int = 0
    files_corrupt: int = 0
    total_seconds: float = 0.0
    start_time: float = field(default_factory=time.time)

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time

    def record(self, entry: ProcessedEntry) -> None:
        self.files_processed += 1
        if entry.is_corrupt:
            self.files_corrupt += 1
        if entry.duration is not None:
            self.total_seconds += entry.duration


class ProgressReporter:
    """Reports batch progress to the user."""

    def report_start(self, total: int) -> None:
        click.echo(f"Parsing {total:,} replay files...", err=True)

    def report_completion(self, stats: BatchStats) -> None:
        elapsed = format_elapsed(stats.elapsed_seconds)
        message = f"Finished parsing {stats.files_processed:,} replays"
        if stats.files_corrupt:
            message += f" ({stats.files_corrupt:,} corrupt)"
        click.echo(f"{message} in {elapsed}", err=True)
        click.echo(f"Total playtime: {format_replay_length(stats.total_seconds)}", err=True)


def format_elapsed(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    if hours > 0:
        return f"{hours}h {minutes}m {secs}s"
    if minutes > 0:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_replay_length(seconds: float | None) -> str:
    if seconds is None:
        return "unknown"
    hours, remainder = divmod(int(round(seconds)), 3600)
    minutes, secs = divmod(remainder, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
