"""Structured per-cell metadata payloads and their packing rules.

A cell's raw metadata value carries no type of its own: it is interpreted by
the payload class of the foreground tile occupying the cell.  Every payload
class offers:

  default()              the value a cell takes when its foreground changes
  from_serialized(raw)   exact inverse of serialize() for every legal value
  serialize()            the raw int / str stored in the layer and sent on the wire

Payloads validate on construction and are immutable afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from tilemirror.core.enums import Direction, MetadataKind
from tilemirror.core.errors import InvalidPayloadError

RawData = Union[int, str]


def _check_int(field: str, value: object, low: int, high: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidPayloadError(f"{field} must be an integer, got {type(value).__name__}")
    if value < low or value > high:
        raise InvalidPayloadError(f"{field} must be between {low} and {high} (inclusive), got {value}")


def _check_raw_int(cls: type, raw: object) -> int:
    if not isinstance(raw, int) or isinstance(raw, bool):
        raise InvalidPayloadError(f"{cls.__name__} expects serialized integer data, got {type(raw).__name__}")
    return raw


@dataclass(frozen=True, slots=True)
class NumberPayload:
    """Coin door / gate threshold."""

    kind: ClassVar[MetadataKind] = MetadataKind.NUMBER
    MAX_VALUE: ClassVar[int] = 16383

    value: int

    def __post_init__(self) -> None:
        _check_int("value", self.value, 0, self.MAX_VALUE)

    @classmethod
    def default(cls) -> NumberPayload:
        return cls(0)

    @classmethod
    def from_serialized(cls, raw: RawData) -> NumberPayload:
        return cls(_check_raw_int(cls, raw))

    def serialize(self) -> int:
        return self.value


@dataclass(frozen=True, slots=True)
class VanishPayload:
    """Seconds until a vanishing block disappears, and until it comes back."""

    kind: ClassVar[MetadataKind] = MetadataKind.VANISH

    time_until_vanished: int
    time_until_reappeared: int

    def __post_init__(self) -> None:
        _check_int("time_until_vanished", self.time_until_vanished, 1, 255)
        _check_int("time_until_reappeared", self.time_until_reappeared, 1, 255)

    @classmethod
    def default(cls) -> VanishPayload:
        return cls(1, 1)

    @classmethod
    def from_serialized(cls, raw: RawData) -> VanishPayload:
        raw = _check_raw_int(cls, raw)
        return cls(raw >> 8, raw & 0xFF)

    def serialize(self) -> int:
        return (self.time_until_vanished << 8) | self.time_until_reappeared


@dataclass(frozen=True, slots=True)
class PortalPayload:
    """Portal link packed as ``direction | my_id << 2 | destination_id << 17``."""

    kind: ClassVar[MetadataKind] = MetadataKind.PORTAL
    MAX_ID: ClassVar[int] = 32767

    my_id: int
    destination_id: int
    direction: Direction

    def __post_init__(self) -> None:
        _check_int("my_id", self.my_id, 0, self.MAX_ID)
        _check_int("destination_id", self.destination_id, 0, self.MAX_ID)
        if isinstance(self.direction, bool) or not isinstance(self.direction, int):
            raise InvalidPayloadError(f"direction must be a Direction, got {self.direction!r}")
        try:
            direction = Direction(self.direction)
        except ValueError:
            raise InvalidPayloadError(f"Invalid direction {self.direction!r}") from None
        object.__setattr__(self, "direction", direction)

    @classmethod
    def default(cls) -> PortalPayload:
        return cls(0, 0, Direction.LEFT)

    @classmethod
    def from_serialized(cls, raw: RawData) -> PortalPayload:
        raw = _check_raw_int(cls, raw)
        return cls((raw >> 2) & cls.MAX_ID, (raw >> 17) & cls.MAX_ID, Direction(raw & 3))

    def serialize(self) -> int:
        return int(self.direction) | (self.my_id << 2) | (self.destination_id << 17)


@dataclass(frozen=True, slots=True)
class TextPayload:
    """Sign text; length is measured in UTF-16 code units like the wire encoding."""

    kind: ClassVar[MetadataKind] = MetadataKind.TEXT
    MAX_LENGTH: ClassVar[int] = 255

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise InvalidPayloadError(f"text must be a string, got {type(self.text).__name__}")
        length = utf16_length(self.text)
        if length < 1 or length > self.MAX_LENGTH:
            raise InvalidPayloadError(f"text length must be between 1 and {self.MAX_LENGTH} (inclusive), got {length}")

    @classmethod
    def default(cls) -> TextPayload:
        return cls(" ")

    @classmethod
    def from_serialized(cls, raw: RawData) -> TextPayload:
        return cls(raw)  # type: ignore[arg-type]

    def serialize(self) -> str:
        return self.text


Payload = Union[NumberPayload, VanishPayload, PortalPayload, TextPayload]

PAYLOAD_CLASSES: dict[MetadataKind, type] = {
    MetadataKind.NUMBER: NumberPayload,
    MetadataKind.VANISH: VanishPayload,
    MetadataKind.PORTAL: PortalPayload,
    MetadataKind.TEXT: TextPayload,
}


def payload_for_kind(kind: MetadataKind) -> type | None:
    """Return the payload class for *kind*, or None for tiles without metadata."""
    return PAYLOAD_CLASSES.get(kind)


def utf16_length(text: str) -> int:
    # Lone surrogates decoded from the wire still count as one unit each
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2
