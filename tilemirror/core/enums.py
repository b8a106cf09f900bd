"""Enumerations used throughout the mirror."""

from __future__ import annotations

from enum import Enum, IntEnum, unique


@unique
class MetadataKind(IntEnum):
    """Structured payload kind a foreground tile accepts in the metadata layer."""

    NONE = 0
    NUMBER = 1
    VANISH = 2
    PORTAL = 3
    TEXT = 4


@unique
class DataLayerType(IntEnum):
    """Per-cell type tag of the compressed metadata layer (wire only)."""

    NOTHING = 0
    UINT32 = 1
    TEXT = 2
    UINT8 = 3
    UINT16 = 4
    VANISH = 5


@unique
class Direction(IntEnum):
    """Portal exit directions."""

    LEFT = 0
    UP = 1
    RIGHT = 2
    DOWN = 3


@unique
class Category(str, Enum):
    """Lobby categories a room can be listed under."""

    OTHER = "none"
    PLATFORMER = "platformer"
    ART = "art"
    BOSS = "boss"
    MINIGAME = "minigame"
    RACE = "race"


@unique
class CoinKind(IntEnum):
    GOLD = 0
    BLUE = 1


@unique
class Permission(IntEnum):
    """Participant permission levels understood by the remote authority."""

    NONE = 0
    GOD = 1
    EDIT = 3
    OWNER = 4


@unique
class Key(str, Enum):
    """Foreground names of the global triggers."""

    BLUE = "blue key"
    PINK = "pink key"
    RED = "red key"
    ORANGE = "orange key"
    LIME = "lime key"
    GREEN = "green key"
    CYAN = "cyan key"


@unique
class RoomEventType(Enum):
    """Every domain event the mirror publishes."""

    # Scalar room properties
    NAME_CHANGED = "room:name"
    CODE_CHANGED = "room:code"
    CATEGORY_CHANGED = "room:category"
    VISIBLE_CHANGED = "room:visible"
    AUTO_SAVE_CHANGED = "room:auto_save"
    ALLOW_SPECTATE_CHANGED = "room:allow_spectate"
    ALLOW_PARTICLE_ACTIONS_CHANGED = "room:allow_particle_actions"
    PLAYS_CHANGED = "room:plays"

    # Whole-room lifecycle
    ROOM_LOADED = "room:load"
    ROOM_CLEARED = "room:clear"
    ROOM_SAVED = "room:save"

    # Cells
    FOREGROUND_CHANGED = "room:fg"
    BACKGROUND_CHANGED = "room:bg"
    DATA_CHANGED = "room:data"

    # Triggers, crown, coins
    KEY_ACTIVATED = "key:activate"
    KEY_DEACTIVATED = "key:deactivate"
    GOLD_CROWN_CHANGED = "room:gold_crown"
    COIN_CHANGED = "player:coin"

    # Roster
    PLAYER_JOINED = "player:joined"
    PLAYER_LEFT = "player:left"
    PLAYER_MOVED = "player:move"
    PLAYER_JUMPED = "player:jump"
    PLAYER_GOD_TOGGLED = "player:god"
    PLAYER_DIED = "player:die"
    PLAYER_RESPAWNED = "player:respawn"
    PLAYER_RESET = "player:reset"
    PLAYER_TELEPORTED = "player:teleport"

    # Session
    KICKED = "session:kick"
    DISCONNECTED = "session:disconnect"
