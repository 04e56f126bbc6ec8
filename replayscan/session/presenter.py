"""Rich rendering of session snapshots."""

from datetime import datetime

from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from replayscan.engine.entry import ProcessedEntry
from replayscan.engine.progress import format_replay_length
from replayscan.session.controller import SessionPhase, SessionSnapshot

# Lines taken by the header panel, progress bar, table chrome and footer
RESERVED_LINES = 12

HELP_TEXT = "[space/enter] scan  [up/down] select  [q/esc] quit"

PHASE_STYLES = {
    SessionPhase.BROWSING: "bold green",
    SessionPhase.PROCESSING: "bold yellow",
    SessionPhase.EXITING: "dim",
}


def build_view(snapshot: SessionSnapshot, max_rows: int | None = None) -> RenderableType:
    """Build the full screen for one snapshot.

    When ``max_rows`` is given, only a window of rows around the selection is
    shown so the highlighted replay stays on screen.
    """
    parts: list[RenderableType] = [_build_header(snapshot)]

    if snapshot.phase is SessionPhase.PROCESSING:
        parts.append(_build_progress(snapshot))

    parts.append(_build_table(snapshot, max_rows))
    parts.append(_build_footer(snapshot))
    return Group(*parts)


def _build_header(snapshot: SessionSnapshot) -> Panel:
    header = Text()
    header.append("REPLAYSCAN", style="bold blue")
    header.append("  ")
    header.append(snapshot.phase.value.upper(), style=PHASE_STYLES[snapshot.phase])
    header.append(f"\n{snapshot.directory}", style="dim")
    return Panel(header, border_style="blue", padding=(0, 1))


def _build_progress(snapshot: SessionSnapshot) -> RenderableType:
    fraction = snapshot.progress if snapshot.progress is not None else 0.0
    bar = ProgressBar(total=1.0, completed=fraction)
    label = Text(f"Parsing replays {snapshot.processed}/{snapshot.total} ({fraction:.0%})")
    return Group(label, bar)


def _build_table(snapshot: SessionSnapshot, max_rows: int | None) -> Table:
    title = f"Replays ({len(snapshot.entries)})"
    if snapshot.corrupt_count:
        title += f", {snapshot.corrupt_count} corrupt"

    table = Table(title=title, expand=True)
    table.add_column("Name", style="magenta", no_wrap=True)
    table.add_column("Recorded", style="cyan")
    table.add_column("Duration", justify="right", style="green")
    table.add_column("Status")

    start, stop = visible_window(len(snapshot.entries), snapshot.selected, max_rows)
    for index in range(start, stop):
        entry = snapshot.entries[index]
        style = _row_style(entry, selected=index == snapshot.selected)
        table.add_row(
            entry.identifier,
            _format_timestamp(entry.modified_at),
            format_replay_length(entry.duration),
            _status(entry),
            style=style,
        )

    return table


def _build_footer(snapshot: SessionSnapshot) -> Text:
    footer = Text(HELP_TEXT, style="dim")
    if snapshot.message:
        footer.append(f"\n{snapshot.message}", style="bold red")
    return footer


def _row_style(entry: ProcessedEntry, selected: bool) -> str | None:
    styles = []
    if entry.is_corrupt:
        styles.append("red")
    if selected:
        styles.append("reverse")
    return " ".join(styles) or None


def _status(entry: ProcessedEntry) -> str:
    if entry.is_corrupt:
        return "corrupt"
    if entry.record is None:
        return "pending"
    return "ok"


def _format_timestamp(unix_timestamp: float) -> str:
    if not unix_timestamp:
        return "unknown"
    return datetime.fromtimestamp(unix_timestamp).strftime("%Y-%m-%d %H:%M")


class RichPresenter:
    """Draws snapshots into a full-screen rich Live display."""

    def __init__(self, console: Console | None = None, screen: bool = True):
        self.console = console or Console()
        self.screen = screen
        self._live: Live | None = None

    def __enter__(self) -> "RichPresenter":
        self._live = Live(
            Text(""),
            console=self.console,
            auto_refresh=False,
            screen=self.screen,
            transient=True,
        )
        self._live.__enter__()
        return self

    def __exit__(self, *args) -> None:
        if self._live:
            self._live.__exit__(*args)
            self._live = None

    def render(self, snapshot: SessionSnapshot) -> None:
        view = build_view(snapshot, max_rows=max(5, self.console.height - RESERVED_LINES))
        if self._live is None:
            self.console.print(view)
            return
        self._live.update(view, refresh=True)


def visible_window(length: int, selected: int, max_rows: int | None) -> tuple[int, int]:
    """Return the [start, stop) slice of rows to draw, keeping ``selected`` inside."""
    if max_rows is None or length <= max_rows:
        return 0, length
    max_rows = max(1, max_rows)
    start = min(max(0, selected - max_rows // 2), length - max_rows)
    return start, start + max_rows
