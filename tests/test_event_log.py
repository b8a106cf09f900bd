"""Tests for EventLog — thread-safe bounded event feed."""

import threading

from tilemirror.core.enums import RoomEventType
from tilemirror.core.events import EventBus, RoomEvent
from tilemirror.core.payloads import VanishPayload
from tilemirror.core.roster import Participant
from tilemirror.core.tiles import TileDefinition
from tilemirror.utils.event_log import EventLog


def _event(i: int = 0) -> RoomEvent:
    return RoomEvent(RoomEventType.PLAYS_CHANGED, value=i)


class TestEventLog:

    def test_sequence_numbers_increase(self):
        log = EventLog()
        for i in range(3):
            log.record(_event(i))
        assert [e.seq for e in log.since(0)] == [1, 2, 3]
        assert [e.value for e in log.since(2)] == [2]

    def test_bounded(self):
        log = EventLog(maxlen=5)
        for i in range(12):
            log.record(_event(i))
        assert len(log) == 5
        assert log.latest(2)[-1].seq == 12

    def test_values_flattened(self):
        log = EventLog()
        alice = Participant(1, "alice")
        log.record(RoomEvent(RoomEventType.FOREGROUND_CHANGED, alice, 2, 3, TileDefinition(1, "basic")))
        log.record(RoomEvent(RoomEventType.DATA_CHANGED, None, 2, 3, VanishPayload(2, 1)))
        fg, data = log.since(0)
        assert (fg.type, fg.participant_id, fg.value) == ("room:fg", 1, "basic")
        assert data.participant_id is None
        assert data.value == 0x0201

    def test_attach_records_bus_traffic(self):
        bus = EventBus()
        log = EventLog()
        log.attach(bus)
        bus.publish(_event(7))
        assert log.latest()[0].value == 7

    def test_clear(self):
        log = EventLog()
        log.record(_event())
        log.clear()
        assert len(log) == 0

    def test_concurrent_writers(self):
        log = EventLog()

        def writer():
            for i in range(200):
                log.record(_event(i))

        threads = [threading.Thread(target=writer) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        seqs = [e.seq for e in log.since(0)]
        assert len(seqs) == 800
        assert sorted(seqs) == list(range(1, 801))
