"""Configuration module for replayscan."""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

BAKKESMOD_REPLAY_SUBPATH = Path("bakkesmod", "bakkesmod", "data", "replays")
ROCKET_LEAGUE_STEAM_APP_ID = "252950"


def default_replay_directory() -> Path:
    """Return the BakkesMod replay directory for the current platform."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / BAKKESMOD_REPLAY_SUBPATH

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / BAKKESMOD_REPLAY_SUBPATH

    # Linux runs the game under Proton, so BakkesMod lives inside the Wine prefix
    steam_root = Path.home() / ".local" / "share" / "Steam"
    prefix = steam_root / "steamapps" / "compatdata" / ROCKET_LEAGUE_STEAM_APP_ID / "pfx"
    roaming = prefix / "drive_c" / "users" / "steamuser" / "AppData" / "Roaming"
    return roaming / BAKKESMOD_REPLAY_SUBPATH


@dataclass
class ScannerConfig:
    extensions: frozenset[str] = frozenset({"replay"})


@dataclass
class DecoderConfig:
    """Settings for the rrrocket decoder.

    ``network_parse`` makes rrrocket decode every network frame, so replays with
    damaged frame data are reported as corrupt. rrrocket then prints the whole
    frame stream as JSON, which is many megabytes per replay and makes each decode
    noticeably slower. Turn it off (``--header-only``) to read just the header.
    """

    command: str = "rrrocket"
    network_parse: bool = True
    timeout_seconds: float | None = 60.0


@dataclass
class SessionConfig:
    poll_timeout: float = 0.05
    autostart: bool = True


@dataclass
class Config:
    replay_directory: Path = field(default_factory=default_replay_directory)
    scanner: ScannerConfig = field(default_factory=ScannerConfig)
    decoder: DecoderConfig = field(default_factory=DecoderConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
