"""Non-blocking keyboard input for the interactive session."""

import os
import sys
import time

from replayscan.session.controller import Command

try:
    import select
    import termios
    import tty

    _HAS_TERMIOS = True
except ImportError:
    _HAS_TERMIOS = False

if sys.platform == "win32":
    import msvcrt

KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"
KEY_ESCAPE = "\x1b"

# How long to wait for the rest of an escape sequence after a bare ESC
ESCAPE_SEQUENCE_WAIT = 0.03

KEY_COMMANDS = {
    " ": Command.SCAN,
    "\r": Command.SCAN,
    "\n": Command.SCAN,
    "q": Command.QUIT,
    "Q": Command.QUIT,
    KEY_ESCAPE: Command.QUIT,
    KEY_UP: Command.UP,
    "\x1bOA": Command.UP,
    "k": Command.UP,
    KEY_DOWN: Command.DOWN,
    "\x1bOB": Command.DOWN,
    "j": Command.DOWN,
}

# Extended key codes msvcrt reports after a "\x00" or "\xe0" prefix
_WINDOWS_ARROWS = {"H": KEY_UP, "P": KEY_DOWN}


def command_for_key(key: str | None) -> Command | None:
    if key is None:
        return None
    return KEY_COMMANDS.get(key)


def _is_partial_escape(data: str) -> bool:
    return data in (KEY_ESCAPE, "\x1b[", "\x1bO")


def first_key(data: str) -> str | None:
    """Split the first key press off a chunk read from the terminal."""
    if not data:
        return None
    if data.startswith(KEY_ESCAPE) and len(data) >= 3 and data[1] in "[O":
        return data[:3]
    if data.startswith(KEY_ESCAPE):
        return KEY_ESCAPE
    return data[0]


class TerminalKeys:
    """Reads single key presses from stdin without waiting for Enter.

    Use as a context manager so the terminal mode is restored on exit.
    """

    def __init__(self) -> None:
        self._fd: int | None = None
        self._old_settings: list | None = None
        self._pending = ""

    def __enter__(self) -> "TerminalKeys":
        if _HAS_TERMIOS and sys.stdin.isatty():
            self._fd = sys.stdin.fileno()
            self._old_settings = termios.tcgetattr(self._fd)
            tty.setcbreak(self._fd)
        return self

    def __exit__(self, *args) -> None:
        if self._fd is not None and self._old_settings is not None:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, self._old_settings)
        self._fd = None
        self._old_settings = None

    def poll(self, timeout: float) -> Command | None:
        return command_for_key(self.read_key(timeout))

    def read_key(self, timeout: float) -> str | None:
        if sys.platform == "win32":
            return self._read_key_windows(timeout)
        return self._read_key_posix(timeout)

    def _read_key_posix(self, timeout: float) -> str | None:
        if not self._pending:
            chunk = self._read_chunk(timeout)
            if chunk is None:
                return None
            self._pending = chunk

        if _is_partial_escape(self._pending):
            # the rest of an arrow key sequence may still be in flight
            rest = self._read_chunk(ESCAPE_SEQUENCE_WAIT)
            if rest:
                self._pending += rest

        key = first_key(self._pending)
        self._pending = self._pending[len(key) :] if key else ""
        return key

    def _read_chunk(self, timeout: float) -> str | None:
        fd = self._fd if self._fd is not None else sys.stdin.fileno()
        started = time.monotonic()
        ready, _, _ = select.select([fd], [], [], timeout)
        if not ready:
            return None

        data = os.read(fd, 32)
        if not data:
            # stdin hit EOF; select keeps reporting it ready, so wait out the timeout
            time.sleep(max(0.0, timeout - (time.monotonic() - started)))
            return None
        return data.decode("utf-8", errors="ignore")

    def _read_key_windows(self, timeout: float) -> str | None:
        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= deadline:
                return None
            time.sleep(0.01)
        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            return _WINDOWS_ARROWS.get(msvcrt.getwch())
        return ch
