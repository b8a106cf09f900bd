"""ChangeNotifier — a scalar that publishes an event only on real change."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from tilemirror.core.enums import RoomEventType
from tilemirror.core.events import EventBus, RoomEvent

T = TypeVar("T")


class ChangeNotifier(Generic[T]):
    """Wraps one room property.

    ``shadow_value`` is the value to resend in the next combined settings
    message.  It is updated together with ``value`` on every change, so the
    two are currently always equal.
    """

    __slots__ = ("_value", "_shadow", "_bus", "_event_type")

    def __init__(self, value: T, bus: EventBus, event_type: RoomEventType) -> None:
        self._value = value
        self._shadow = value
        self._bus = bus
        self._event_type = event_type

    @property
    def value(self) -> T:
        return self._value

    @property
    def shadow_value(self) -> T:
        return self._shadow

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> bool:
        """Store *value*; publish and return True only if it differs."""
        if _same(self._value, value):
            return False
        self._shadow = value
        self._bus.publish(RoomEvent(self._event_type, value=value))
        self._value = value
        return True

    def __repr__(self) -> str:
        return f"ChangeNotifier({self._event_type.name}={self._value!r})"


def _same(a: Any, b: Any) -> bool:
    # True == 1 in Python; a bool flag changing to an int is still a change
    return a is b or (type(a) is type(b) and a == b)
