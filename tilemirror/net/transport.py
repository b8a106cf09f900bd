"""Boundary with the connection collaborator.

The connection delivers typed, already-deframed messages and exposes
``send(type, payload)``; the mirror registers one handler per message type.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Callable, Protocol

from tilemirror.net.packet import Packet

logger = logging.getLogger(__name__)

MessageHandler = Callable[[Any], None]


class Transport(Protocol):
    def send(self, packet: Packet, payload: Any = None) -> None: ...

    def on(self, packet: Packet, handler: MessageHandler) -> None: ...


class LoopbackTransport:
    """In-process transport: records outbound messages, dispatches injected inbound ones.

    Backs offline inspection of captured rooms and the test-suite.
    """

    __slots__ = ("sent", "_handlers")

    def __init__(self) -> None:
        self.sent: list[tuple[Packet, Any]] = []
        self._handlers: dict[Packet, list[MessageHandler]] = defaultdict(list)

    def send(self, packet: Packet, payload: Any = None) -> None:
        logger.debug("send %s %r", packet.name, payload)
        self.sent.append((packet, payload))

    def on(self, packet: Packet, handler: MessageHandler) -> None:
        self._handlers[packet].append(handler)

    def receive(self, packet: Packet, payload: Any = None) -> None:
        """Deliver one inbound message to every handler registered for *packet*."""
        handlers = self._handlers.get(packet)
        if not handlers:
            logger.debug("No handler for inbound %s", packet.name)
            return
        for handler in list(handlers):
            handler(payload)

    def sent_of(self, packet: Packet) -> list[Any]:
        return [payload for p, payload in self.sent if p == packet]
