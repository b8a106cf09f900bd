"""Thread-safe bounded log of room events exposed via the API."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any

from tilemirror.core.events import EventBus, RoomEvent


@dataclass(frozen=True, slots=True)
class LoggedEvent:
    """A RoomEvent flattened for the API event feed."""

    seq: int
    type: str
    participant_id: int | None = None
    x: float | None = None
    y: float | None = None
    value: Any = None


def _plain(value: Any) -> Any:
    # Tiles, participants and payloads are reduced to JSON-friendly values
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (tuple, list)):
        return [_plain(v) for v in value]
    if hasattr(value, "serialize"):
        return value.serialize()
    if hasattr(value, "name"):
        return value.name
    return str(value)


class EventLog:
    """Bounded event log. The bus appends; API readers snapshot a slice.

    Writes happen on the mirror's thread, reads on API worker threads,
    so both go through a simple lock.
    """

    __slots__ = ("_buffer", "_lock", "_seq")

    def __init__(self, maxlen: int | None = None) -> None:
        self._buffer: deque[LoggedEvent] = deque(maxlen=maxlen)
        self._lock = threading.Lock()
        self._seq = itertools.count(1)

    def attach(self, bus: EventBus) -> None:
        bus.subscribe(self.record)

    def record(self, event: RoomEvent) -> None:
        p = event.participant
        with self._lock:
            self._buffer.append(LoggedEvent(
                seq=next(self._seq),
                type=event.type.value,
                participant_id=p.id if p is not None else None,
                x=event.x,
                y=event.y,
                value=_plain(event.value),
            ))

    def since(self, seq: int) -> list[LoggedEvent]:
        """Return all retained events with sequence number > *seq*."""
        with self._lock:
            return [e for e in self._buffer if e.seq > seq]

    def latest(self, count: int = 50) -> list[LoggedEvent]:
        """Return the *count* most recent events."""
        with self._lock:
            items = list(self._buffer)
        return items[-count:]

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
