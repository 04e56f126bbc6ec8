"""Session state machine driving the interactive replay browser."""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Protocol

from replayscan.engine.batch import BatchJob, BatchProcessor
from replayscan.engine.entry import ProcessedEntry
from replayscan.errors import ScanError
from replayscan.scanner.filesystem import FileHandle, scan_directory

logger = logging.getLogger(__name__)


class SessionPhase(Enum):
    """Which state the session is in."""

    BROWSING = "browsing"
    PROCESSING = "processing"
    EXITING = "exiting"


class Command(Enum):
    """User commands recognised by the session."""

    SCAN = "scan"
    QUIT = "quit"
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class Browsing:
    results: tuple[ProcessedEntry, ...] = ()
    selected: int = 0
    message: str | None = None


@dataclass(frozen=True)
class Processing:
    job: BatchJob
    selected: int = 0


@dataclass(frozen=True)
class Exiting:
    pass


SessionState = Browsing | Processing | Exiting


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session handed to the presenter."""

    phase: SessionPhase
    directory: Path
    entries: tuple[ProcessedEntry, ...]
    selected: int
    progress: float | None
    processed: int
    total: int
    message: str | None = None

    @property
    def corrupt_count(self) -> int:
        return sum(1 for e in self.entries if e.is_corrupt)


class Presenter(Protocol):
    def render(self, snapshot: SessionSnapshot) -> None:
        """Draw the snapshot."""


class InputSource(Protocol):
    def poll(self, timeout: float) -> Command | None:
        """Wait up to ``timeout`` seconds for one command."""


Lister = Callable[[Path, Iterable[str]], list[FileHandle]]


class SessionController:
    """Runs the browse/process loop, one decode per tick."""

    def __init__(
        self,
        directory: Path,
        processor: BatchProcessor,
        extensions: Iterable[str] = ("replay",),
        poll_timeout: float = 0.05,
        lister: Lister = scan_directory,
    ):
        self.directory = directory
        self.processor = processor
        self.extensions = frozenset(extensions)
        self.poll_timeout = poll_timeout
        self.lister = lister
        self.state: SessionState = Browsing()

    @property
    def phase(self) -> SessionPhase:
        match self.state:
            case Browsing():
                return SessionPhase.BROWSING
            case Processing():
                return SessionPhase.PROCESSING
            case Exiting():
                return SessionPhase.EXITING

    @property
    def is_running(self) -> bool:
        return not isinstance(self.state, Exiting)

    def start_scan(self) -> None:
        """List the directory afresh and begin processing it.

        Any job already in flight is dropped along with its partial results.

        Raises:
            ScanError: if the directory cannot be listed.
        """
        handles = self.lister(self.directory, self.extensions)
        self.state = Processing(job=self.processor.start(handles))

    def advance(self) -> None:
        """Decode one file, or leave Processing once the job is done."""
        match self.state:
            case Processing(job=job, selected=selected) if job.is_finished:
                results = tuple(job.completed)
                self.state = Browsing(results=results, selected=_clamp(selected, len(results)))
            case Processing(job=job):
                self.processor.step(job)
            case _:
                pass

    def handle(self, command: Command | None) -> None:
        if command is None or isinstance(self.state, Exiting):
            return

        match command:
            case Command.QUIT:
                self.state = Exiting()
            case Command.SCAN:
                self._restart()
            case Command.UP:
                self._move_selection(-1)
            case Command.DOWN:
                self._move_selection(1)

    def snapshot(self) -> SessionSnapshot:
        match self.state:
            case Browsing(results=results, selected=selected, message=message):
                return SessionSnapshot(
                    phase=SessionPhase.BROWSING,
                    directory=self.directory,
                    entries=results,
                    selected=selected,
                    progress=None,
                    processed=len(results),
                    total=len(results),
                    message=message,
                )
            case Processing(job=job, selected=selected):
                return SessionSnapshot(
                    phase=SessionPhase.PROCESSING,
                    directory=self.directory,
                    entries=tuple(job.completed),
                    selected=selected,
                    progress=job.progress,
                    processed=job.cursor,
                    total=job.total,
                )
            case _:
                return SessionSnapshot(
                    phase=SessionPhase.EXITING,
                    directory=self.directory,
                    entries=(),
                    selected=0,
                    progress=None,
                    processed=0,
                    total=0,
                )

    def tick(self, presenter: Presenter, source: InputSource) -> None:
        self.advance()
        presenter.render(self.snapshot())
        self.handle(source.poll(self.poll_timeout))

    def run(self, presenter: Presenter, source: InputSource) -> None:
        while self.is_running:
            self.tick(presenter, source)

    def _restart(self) -> None:
        try:
            self.start_scan()
        except ScanError as e:
            logger.warning("Rescan failed: %s", e)
            match self.state:
                case Browsing() as browsing:
                    self.state = replace(browsing, message=str(e))
                case _:
                    self.state = Browsing(message=str(e))

    def _move_selection(self, delta: int) -> None:
        match self.state:
            case Browsing(results=results, selected=selected) as browsing:
                self.state = replace(browsing, selected=_clamp(selected + delta, len(results)))
            case Processing(job=job, selected=selected) as processing:
                self.state = replace(
                    processing, selected=_clamp(selected + delta, len(job.completed))
                )
            case _:
                pass


def _clamp(index: int, length: int) -> int:
    if length == 0:
        return 0
    return max(0, min(index, length - 1))
