"""Tests for ChangeNotifier — publish only on real change."""

from tilemirror.core.enums import RoomEventType
from tilemirror.core.events import EventBus
from tilemirror.core.notifier import ChangeNotifier


def _notifier(initial):
    bus = EventBus()
    seen = []
    bus.subscribe(seen.append)
    return ChangeNotifier(initial, bus, RoomEventType.NAME_CHANGED), seen


def test_unchanged_value_is_silent():
    n, seen = _notifier("lobby")
    assert n.set("lobby") is False
    assert seen == []


def test_change_publishes_new_value():
    n, seen = _notifier("lobby")
    assert n.set("arena") is True
    assert [(e.type, e.value) for e in seen] == [(RoomEventType.NAME_CHANGED, "arena")]
    assert n.get() == n.value == "arena"


def test_value_is_stored_after_publish():
    bus = EventBus()
    n = ChangeNotifier(1, bus, RoomEventType.PLAYS_CHANGED)
    observed = []
    bus.subscribe(lambda e: observed.append(n.value))
    n.set(2)
    assert observed == [1]
    assert n.value == 2


def test_shadow_tracks_value():
    n, _ = _notifier(False)
    assert n.shadow_value is False
    n.set(True)
    assert n.shadow_value is True
    n.set(True)
    assert n.shadow_value is n.value


def test_bool_to_int_counts_as_change():
    n, seen = _notifier(True)
    n.set(1)
    assert len(seen) == 1


def test_subscription_filter_and_unsubscribe():
    bus = EventBus()
    names, plays = [], []
    bus.subscribe(names.append, RoomEventType.NAME_CHANGED)
    stop = bus.subscribe(plays.append, RoomEventType.PLAYS_CHANGED)
    ChangeNotifier("a", bus, RoomEventType.NAME_CHANGED).set("b")
    counter = ChangeNotifier(0, bus, RoomEventType.PLAYS_CHANGED)
    counter.set(1)
    stop()
    counter.set(2)
    assert len(names) == 1
    assert [e.value for e in plays] == [1]
