"""Tests for ModificationBatcher — debounced edit coalescing."""

import asyncio

from tilemirror.net.batcher import ModificationBatcher
from tilemirror.net.packet import Packet
from tilemirror.net.scheduler import ManualScheduler
from tilemirror.net.transport import LoopbackTransport


def _batcher(delay: float = 0.005):
    transport = LoopbackTransport()
    scheduler = ManualScheduler()
    return ModificationBatcher(transport, Packet.FOREGROUND, scheduler, delay), transport, scheduler


class TestCoalescing:

    def test_three_edits_one_message_in_order(self):
        batcher, transport, scheduler = _batcher()
        batcher.enqueue(1, 1, 10)
        scheduler.advance(0.001)
        batcher.enqueue(2, 1, 11)
        scheduler.advance(0.001)
        batcher.enqueue(3, 1, 12)
        assert transport.sent == []

        scheduler.advance(0.005)
        assert transport.sent == [(Packet.FOREGROUND, [1, 1, 10, 2, 1, 11, 3, 1, 12])]

    def test_enqueue_while_armed_does_not_reset_delay(self):
        batcher, transport, scheduler = _batcher()
        batcher.enqueue(0, 0, 1)
        scheduler.advance(0.004)
        batcher.enqueue(0, 1, 1)
        scheduler.advance(0.0011)
        assert len(transport.sent) == 1
        assert scheduler.pending == 0

    def test_flush_clears_and_disarms(self):
        batcher, transport, scheduler = _batcher()
        batcher.enqueue(4, 5, 6)
        assert batcher.armed
        assert batcher.pending == [(4, 5, 6)]
        scheduler.advance(0.01)
        assert not batcher.armed
        assert batcher.pending == []

    def test_explicit_flush_cancels_timer(self):
        batcher, transport, scheduler = _batcher()
        batcher.enqueue(1, 1, 1)
        batcher.flush()
        assert not batcher.armed
        assert scheduler.advance(0.01) == 0
        assert transport.sent_of(Packet.FOREGROUND) == [[1, 1, 1]]

    def test_flush_with_empty_queue_sends_nothing(self):
        batcher, transport, _ = _batcher()
        batcher.flush()
        assert transport.sent == []

    def test_next_batch_rearms(self):
        batcher, transport, scheduler = _batcher()
        batcher.enqueue(1, 1, 1)
        scheduler.advance(0.01)
        batcher.enqueue(2, 2, 2)
        scheduler.advance(0.01)
        assert transport.sent_of(Packet.FOREGROUND) == [[1, 1, 1], [2, 2, 2]]


class TestForceFlush:

    def test_noop_when_unarmed(self):
        batcher, transport, _ = _batcher()
        batcher.force_flush()
        assert transport.sent == []

    def test_sends_synchronously_and_cancels_timer(self):
        batcher, transport, scheduler = _batcher()
        batcher.enqueue(1, 2, 3)
        batcher.force_flush()
        assert transport.sent == [(Packet.FOREGROUND, [1, 2, 3])]
        assert scheduler.advance(1.0) == 0
        assert len(transport.sent) == 1


class TestAsyncioScheduler:
    """A running asyncio loop is the production scheduler."""

    def test_flushes_after_delay(self):
        transport = LoopbackTransport()

        async def scenario():
            batcher = ModificationBatcher(transport, Packet.BACKGROUND, asyncio.get_running_loop())
            batcher.enqueue(1, 1, 2)
            batcher.enqueue(2, 1, 2)
            batcher.enqueue(3, 1, 2)
            assert transport.sent == []
            await asyncio.sleep(0.05)

        asyncio.run(scenario())
        assert transport.sent == [(Packet.BACKGROUND, [1, 1, 2, 2, 1, 2, 3, 1, 2])]
