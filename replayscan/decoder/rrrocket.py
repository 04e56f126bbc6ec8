"""rrrocket wrapper for replay decoding."""

import json
import shutil
import subprocess

from replayscan.decoder.models import Record, record_from_json
from replayscan.errors import DecodeError, DecoderNotFoundError


class RrrocketRunner:
    """Decodes replays by piping them through the rrrocket executable."""

    def __init__(
        self,
        command: str = "rrrocket",
        network_parse: bool = True,
        timeout_seconds: float | None = 60.0,
    ) -> None:
        self.network_parse = network_parse
        self.timeout_seconds = timeout_seconds
        self.executable = self._find_executable(command)

    def _find_executable(self, command: str) -> str:
        path = shutil.which(command)
        if not path:
            raise DecoderNotFoundError(
                f"{command} is required but not found.\n"
                "Please install rrrocket: https://github.com/nickbabcock/rrrocket"
            )
        return path

    @property
    def args(self) -> list[str]:
        return ["-n"] if self.network_parse else []

    def decode(self, data: bytes) -> Record:
        """Decode one replay passed on stdin."""
        if not data:
            raise DecodeError("Replay is empty")

        cmd = [self.executable] + self.args

        try:
            result = subprocess.run(
                cmd,
                input=data,
                capture_output=True,
                timeout=self.timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise DecodeError(f"rrrocket timed out after {e.timeout}s") from e
        except OSError as e:
            raise DecodeError(f"Could not run rrrocket: {e}") from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise DecodeError(stderr or f"rrrocket exited with status {result.returncode}")

        try:
            payload = json.loads(result.stdout)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"JSON parse error: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError("Unexpected rrrocket output")

        return record_from_json(payload)
