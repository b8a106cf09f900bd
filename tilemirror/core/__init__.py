"""Core data model: tiles, payloads, grids, codec, events and the mirrored room."""

from tilemirror.core.enums import DataLayerType, Direction, MetadataKind, RoomEventType
from tilemirror.core.events import EventBus, RoomEvent
from tilemirror.core.grid import Grid, MetadataLayer
from tilemirror.core.notifier import ChangeNotifier
from tilemirror.core.room import Room
from tilemirror.core.snapshot import RoomSnapshot
from tilemirror.core.tiles import TileCatalog, TileDefinition

__all__ = [
    "ChangeNotifier",
    "DataLayerType",
    "Direction",
    "EventBus",
    "Grid",
    "MetadataKind",
    "MetadataLayer",
    "Room",
    "RoomEvent",
    "RoomEventType",
    "RoomSnapshot",
    "TileCatalog",
    "TileDefinition",
]
