"""Tests for Session wiring: kick, disconnect and asyncio scheduling."""

import asyncio

from tilemirror.config import MirrorConfig
from tilemirror.core.enums import RoomEventType
from tilemirror.net.packet import Packet
from tilemirror.net.session import Session
from tilemirror.net.transport import LoopbackTransport
from tests.helpers.world_factory import make_catalog, make_join_state, make_mirror


def test_kick_published():
    mirror = make_mirror()
    mirror.transport.receive(Packet.KICK, "bye")
    (event,) = mirror.events
    assert event.type == RoomEventType.KICKED
    assert event.value == "bye"


def test_disconnect_published():
    mirror = make_mirror()
    mirror.session.disconnected()
    assert mirror.event_types() == [RoomEventType.DISCONNECTED]


def test_configured_batch_delay():
    mirror = make_mirror(MirrorConfig(batch_delay_seconds=0.1))
    mirror.room.set_foreground(1, 1, "basic")
    mirror.tick(0.05)
    assert mirror.transport.sent == []
    mirror.tick(0.05)
    assert len(mirror.transport.sent) == 1


def test_runs_on_asyncio_loop():
    catalog = make_catalog()
    transport = LoopbackTransport()

    async def scenario():
        session = Session(transport, catalog, make_join_state(catalog), asyncio.get_running_loop())
        session.room.set_foreground(1, 1, "basic")
        session.room.set_foreground(2, 1, "basic")
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    basic = catalog.foreground_id("basic")
    assert transport.sent == [(Packet.FOREGROUND, [1, 1, basic, 2, 1, basic])]
