"""Interactive replay browsing session."""

from replayscan.session.controller import (
    Browsing,
    Command,
    Exiting,
    Processing,
    SessionController,
    SessionPhase,
    SessionSnapshot,
)
from replayscan.session.keys import TerminalKeys, command_for_key
from replayscan.session.presenter import RichPresenter, build_view

__all__ = [
    "Browsing",
    "Command",
    "Exiting",
    "Processing",
    "RichPresenter",
    "SessionController",
    "SessionPhase",
    "SessionSnapshot",
    "TerminalKeys",
    "build_view",
    "command_for_key",
]
