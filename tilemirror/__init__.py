"""tilemirror — client-side mirror of a remote tile-based multiplayer world."""

from tilemirror.config import MirrorConfig
from tilemirror.core.enums import Category, Direction, Key, MetadataKind, Permission, RoomEventType
from tilemirror.core.errors import (
    CorruptGridError,
    InvalidPayloadError,
    LocationOutOfBoundsError,
    TileMirrorError,
    TileNotPlaceableError,
    UnknownTileError,
    ValidationError,
)
from tilemirror.core.payloads import NumberPayload, PortalPayload, TextPayload, VanishPayload
from tilemirror.core.room import Room
from tilemirror.core.tiles import TileCatalog, TileDefinition
from tilemirror.net.session import JoinState, Session

__all__ = [
    "Category",
    "CorruptGridError",
    "Direction",
    "InvalidPayloadError",
    "JoinState",
    "Key",
    "LocationOutOfBoundsError",
    "MetadataKind",
    "MirrorConfig",
    "NumberPayload",
    "Permission",
    "PortalPayload",
    "Room",
    "RoomEventType",
    "Session",
    "TextPayload",
    "TileCatalog",
    "TileDefinition",
    "TileMirrorError",
    "TileNotPlaceableError",
    "UnknownTileError",
    "ValidationError",
    "VanishPayload",
]
