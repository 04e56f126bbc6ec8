"""Decoded replay records and their header properties."""

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass(frozen=True)
class FloatProp:
    value: float


@dataclass(frozen=True)
class IntProp:
    value: int


@dataclass(frozen=True)
class StrProp:
    value: str


@dataclass(frozen=True)
class OtherProp:
    """Any header value the engine does not interpret (arrays, bytes, bools...)."""

    value: Any


HeaderProp = FloatProp | IntProp | StrProp | OtherProp


@dataclass
class Record:
    """A decoded replay, reduced to its header."""

    properties: dict[str, HeaderProp] = field(default_factory=dict)
    game_type: str | None = None

    def get(self, name: str) -> HeaderProp | None:
        return self.properties.get(name)


class RecordingDecoder(Protocol):
    """Protocol for replay decoders."""

    def decode(self, data: bytes) -> Record:
        """Decode raw replay bytes, raising DecodeError when they are malformed."""


def header_prop_from_json(value: Any) -> HeaderProp:
    """Tag a JSON header value with the variant it was serialized from."""
    # bool is a subclass of int, so it has to be ruled out first
    if isinstance(value, bool):
        return OtherProp(value)
    if isinstance(value, float):
        return FloatProp(value)
    if isinstance(value, int):
        return IntProp(value)
    if isinstance(value, str):
        return StrProp(value)
    return OtherProp(value)


def record_from_json(data: dict) -> Record:
    properties = data.get("properties") or {}
    if not isinstance(properties, dict):
        properties = {}

    game_type = data.get("game_type")

    return Record(
        properties={name: header_prop_from_json(value) for name, value in properties.items()},
        game_type=game_type if isinstance(game_type, str) else None,
    )
