"""ModificationBatcher — debounced coalescing of outbound cell edits.

Edits of one kind (foreground, background or metadata) are queued as flat
``x, y, value`` triples and sent as a single message once a short quiescent
window has elapsed.  Bursts such as a drag-paint become one message, which
also compresses better in the transport framing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tilemirror.net.packet import Packet
    from tilemirror.net.scheduler import Scheduler, TimerHandle
    from tilemirror.net.transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_DELAY_SECONDS = 0.005


class ModificationBatcher:
    """Pending edits of one kind plus at most one armed flush timer.

    The timer is armed by the first enqueue and is not reset by later ones,
    so a batch is never held back longer than ``delay`` seconds.
    """

    __slots__ = ("_transport", "_packet", "_scheduler", "_delay", "_queue", "_timer")

    def __init__(
        self,
        transport: Transport,
        packet: Packet,
        scheduler: Scheduler,
        delay: float = DEFAULT_DELAY_SECONDS,
    ) -> None:
        self._transport = transport
        self._packet = packet
        self._scheduler = scheduler
        self._delay = delay
        self._queue: list[Any] = []
        self._timer: TimerHandle | None = None

    @property
    def packet(self) -> Packet:
        return self._packet

    @property
    def armed(self) -> bool:
        return self._timer is not None

    @property
    def pending(self) -> list[tuple[int, int, Any]]:
        q = self._queue
        return [(q[i], q[i + 1], q[i + 2]) for i in range(0, len(q), 3)]

    def enqueue(self, x: int, y: int, value: Any) -> None:
        if self._timer is None:
            self._timer = self._scheduler.call_later(self._delay, self.flush)
        self._queue.extend((x, y, value))

    def flush(self) -> None:
        """Send everything pending as one message and disarm."""
        timer, self._timer = self._timer, None
        if timer is not None:
            # No-op when the timer itself is firing
            timer.cancel()
        batch, self._queue = self._queue, []
        if not batch:
            return
        logger.debug("Flushing %d %s edit(s)", len(batch) // 3, self._packet.name)
        self._transport.send(self._packet, batch)

    def force_flush(self) -> None:
        """Flush synchronously if a timer is armed; no-op otherwise."""
        if self._timer is not None:
            self.flush()
