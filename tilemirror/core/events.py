"""Typed domain events and the synchronous publish/subscribe channel."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from tilemirror.core.enums import RoomEventType

if TYPE_CHECKING:
    from tilemirror.core.roster import Participant

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RoomEvent:
    """Something changed in the mirror, and who caused it (None = server / self)."""

    type: RoomEventType
    participant: Participant | None = None
    x: int | None = None
    y: int | None = None
    value: Any = None


EventHandler = Callable[[RoomEvent], None]


class EventBus:
    """Single typed channel; handlers run synchronously in subscription order."""

    __slots__ = ("_subscribers",)

    def __init__(self) -> None:
        self._subscribers: list[tuple[frozenset[RoomEventType] | None, EventHandler]] = []

    def subscribe(self, handler: EventHandler, *types: RoomEventType) -> Callable[[], None]:
        """Register *handler* for *types* (all types when none given).

        Returns a callable that removes the subscription.
        """
        entry = (frozenset(types) if types else None, handler)
        self._subscribers.append(entry)

        def unsubscribe() -> None:
            if entry in self._subscribers:
                self._subscribers.remove(entry)

        return unsubscribe

    def publish(self, event: RoomEvent) -> None:
        logger.debug("publish %s", event.type.name)
        for types, handler in list(self._subscribers):
            if types is None or event.type in types:
                handler(event)
