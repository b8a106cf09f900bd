"""Tests for captured joins and the command-line entry point."""

import logging

import pytest

from tilemirror.__main__ import main
from tilemirror.api.dependencies import open_capture
from tilemirror.config import MirrorConfig
from tilemirror.net.capture import dump_capture, load_capture
from tilemirror.net.scheduler import ManualScheduler
from tilemirror.net.session import JoinState, Session
from tilemirror.net.transport import LoopbackTransport
from tests.helpers.world_factory import BACKGROUNDS_JSON, TILES_JSON, make_catalog, make_join_state


@pytest.fixture
def capture_path(tmp_path):
    joined = make_join_state(make_catalog(), width=5, height=4, crown=2)
    path = tmp_path / "captures" / "room.json"
    dump_capture(path, TILES_JSON, BACKGROUNDS_JSON, joined)
    return path, joined


class TestCapture:

    def test_round_trip(self, capture_path):
        path, joined = capture_path
        catalog, loaded = load_capture(path)
        assert loaded == joined
        assert catalog.foreground_id("portal") == make_catalog().foreground_id("portal")

    def test_session_from_capture(self, capture_path):
        catalog, joined = load_capture(capture_path[0])
        session = Session(LoopbackTransport(), catalog, joined, ManualScheduler())
        assert session.room.gold_crown_player.name == "bob"
        assert session.room.get_foreground(0, 0).name == "shiny light grey"


class TestOpenCapture:

    def test_builds_manager(self, capture_path):
        manager = open_capture(capture_path[0], MirrorConfig(event_log_size=3))
        room = manager.session.room
        assert (room.width, room.height) == (5, 4)
        room.set_foreground(1, 1, "basic")
        room.flush()
        assert manager.session.room.get_foreground(1, 1).name == "basic"
        assert manager.event_log.since(0) == []


class TestJoinStateFromWire:

    def test_positional_payload(self):
        reference = make_join_state(make_catalog(), width=3, height=3)
        wire = [
            3, 3, reference.foreground, reference.background, reference.metadata,
            [list(p) for p in reference.players], None, 4, 2,
            "Test Room", "secret", "platformer", True, False, True, False, 3, [],
        ]
        assert JoinState.from_wire(wire) == reference


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("tilemirror.net").setLevel(logging.NOTSET)


class TestCli:

    def test_inspect(self, capture_path, capsys, restore_root_logger):
        main(["inspect", str(capture_path[0]), "--top", "2", "--log-level", "WARNING"])
        out = capsys.readouterr().out
        assert "Room: 'Test Room' (5x4" in out
        assert "shiny light grey" in out
        assert "Participants online: 2" in out
