"""Room — the local replica of the remote world, and its only writer.

Two input channels feed the replica:

  1. Local optimistic edits (``set_foreground`` / ``set_background`` /
     ``set_data``): validated, applied in place without publishing an event,
     then queued on the matching ModificationBatcher.
  2. Authoritative inbound messages: trusted, applied through the same grid
     logic, and always published as a RoomEvent attributed to the originating
     participant (None for server / unattributed changes).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable

from tilemirror.core.codec import cleared_grids, decode_grid, decode_metadata_layer
from tilemirror.core.enums import CoinKind, RoomEventType
from tilemirror.core.errors import InvalidPayloadError, LocationOutOfBoundsError, TileNotPlaceableError
from tilemirror.core.events import EventBus, RoomEvent
from tilemirror.core.notifier import ChangeNotifier
from tilemirror.core.settings import SETTINGS_FIELDS, validate_setting
from tilemirror.core.snapshot import RoomSnapshot
from tilemirror.net.batcher import ModificationBatcher
from tilemirror.net.packet import Packet

if TYPE_CHECKING:
    from tilemirror.config import MirrorConfig
    from tilemirror.core.grid import Grid, MetadataLayer
    from tilemirror.core.payloads import Payload
    from tilemirror.core.roster import Participant, Roster
    from tilemirror.core.tiles import TileCatalog, TileDefinition, TileRef
    from tilemirror.net.scheduler import Scheduler
    from tilemirror.net.transport import Transport

logger = logging.getLogger(__name__)

_SETTING_EVENTS: dict[str, RoomEventType] = {
    "name": RoomEventType.NAME_CHANGED,
    "code": RoomEventType.CODE_CHANGED,
    "category": RoomEventType.CATEGORY_CHANGED,
    "visible": RoomEventType.VISIBLE_CHANGED,
    "auto_save": RoomEventType.AUTO_SAVE_CHANGED,
    "allow_spectate": RoomEventType.ALLOW_SPECTATE_CHANGED,
    "allow_particle_actions": RoomEventType.ALLOW_PARTICLE_ACTIONS_CHANGED,
}


class Room:
    """Mirrored room: grids, metadata layer, triggers, coins and settings."""

    def __init__(
        self,
        *,
        catalog: TileCatalog,
        transport: Transport,
        scheduler: Scheduler,
        bus: EventBus,
        roster: Roster,
        config: MirrorConfig,
        width: int,
        height: int,
        foreground: bytes,
        background: bytes,
        metadata: bytes,
        settings: dict[str, Any],
        plays: int = 0,
        active_keys: Iterable[int] = (),
        gold_coin_count: int = 0,
        blue_coin_count: int = 0,
        gold_crown_player: Participant | None = None,
    ) -> None:
        self._catalog = catalog
        self._transport = transport
        self._bus = bus
        self._roster = roster
        self._config = config
        self._width = width
        self._height = height

        self._fg: Grid = decode_grid(foreground, width, height)
        self._bg: Grid = decode_grid(background, width, height)
        self._dl: MetadataLayer = decode_metadata_layer(metadata, width, height)

        self._settings: dict[str, ChangeNotifier] = {
            field: ChangeNotifier(settings[field], bus, _SETTING_EVENTS[field])
            for field in SETTINGS_FIELDS
        }
        self._plays = ChangeNotifier(plays, bus, RoomEventType.PLAYS_CHANGED)
        self._active_keys: set[str] = {catalog.foreground(k).name for k in active_keys}
        self._gold_coin_count = gold_coin_count
        self._blue_coin_count = blue_coin_count
        self._gold_crown_player = gold_crown_player

        delay = config.batch_delay_seconds
        self._fg_queue = ModificationBatcher(transport, Packet.FOREGROUND, scheduler, delay)
        self._bg_queue = ModificationBatcher(transport, Packet.BACKGROUND, scheduler, delay)
        self._data_queue = ModificationBatcher(transport, Packet.FOREGROUND_DATA, scheduler, delay)

        logger.info("Room '%s' mirrored: %dx%d", self.name, width, height)

    def attach(self) -> None:
        """Register the inbound message handlers on the transport."""
        t = self._transport
        t.on(Packet.PLAYCOUNT, self._on_play_count)
        t.on(Packet.LEAVE, self._on_player_leave)
        t.on(Packet.CROWN, self._on_crown)
        t.on(Packet.FOREGROUND_INFO, self._on_foreground_info)
        t.on(Packet.BACKGROUND_INFO, self._on_background_info)
        t.on(Packet.FOREGROUND_DATA_INFO, self._on_data_info)
        t.on(Packet.CLEARROOM, self._on_clear)
        t.on(Packet.LOADROOM, self._on_load)
        t.on(Packet.SAVEROOM, self._on_save)
        t.on(Packet.OWNERINFO, self._on_owner_info)
        t.on(Packet.UPDATEINFO, self._on_update_info)
        t.on(Packet.ACTIVATEKEY, self._on_activate_key)
        t.on(Packet.KEY_STATUS, self._on_key_status)
        t.on(Packet.ADDCOIN, self._on_add_coin)
        t.on(Packet.REMOVECOIN, self._on_remove_coin)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def catalog(self) -> TileCatalog:
        return self._catalog

    @property
    def plays(self) -> int:
        return self._plays.value

    @property
    def gold_coin_count(self) -> int:
        return self._gold_coin_count

    @property
    def blue_coin_count(self) -> int:
        return self._blue_coin_count

    @property
    def gold_crown_player(self) -> Participant | None:
        return self._gold_crown_player

    @property
    def active_keys(self) -> tuple[str, ...]:
        return tuple(sorted(self._active_keys))

    def is_key_active(self, key: str) -> bool:
        return _key_name(key) in self._active_keys

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        return x < 0 or y < 0 or x >= self._width or y >= self._height

    def get_foreground_id(self, x: int, y: int) -> int:
        return self._fg.get(x, y)

    def get_foreground(self, x: int, y: int) -> TileDefinition:
        return self._catalog.foreground(self._fg.get(x, y))

    def get_background_id(self, x: int, y: int) -> int:
        return self._bg.get(x, y)

    def get_background(self, x: int, y: int) -> TileDefinition:
        return self._catalog.background(self._bg.get(x, y))

    def get_data(self, x: int, y: int) -> Payload | None:
        """Metadata at (x, y) interpreted by the current foreground; None if it takes none."""
        cls = self.get_foreground(x, y).payload_class
        if cls is None:
            return None
        raw = self._dl.get(x, y)
        if raw is None:
            return cls.default()
        return cls.from_serialized(raw)

    def snapshot(self) -> RoomSnapshot:
        return RoomSnapshot.from_room(self, self._fg, self._bg, self._dl)

    # ------------------------------------------------------------------
    # Local optimistic edits
    # ------------------------------------------------------------------

    def _check_bounds(self, x: int, y: int) -> None:
        if self.is_out_of_bounds(x, y):
            raise LocationOutOfBoundsError(x, y, self._width, self._height)

    def set_foreground(self, x: int, y: int, foreground: TileRef) -> None:
        self._check_bounds(x, y)
        tile = self._catalog.resolve_foreground(foreground)
        if not tile.placeable:
            raise TileNotPlaceableError(tile.name)
        if self._fg.get(x, y) == tile.id:
            return
        self._write_foreground(x, y, tile)
        self._fg_queue.enqueue(x, y, tile.id)

    def set_background(self, x: int, y: int, background: TileRef) -> None:
        self._check_bounds(x, y)
        tile = self._catalog.resolve_background(background)
        if self._bg.get(x, y) == tile.id:
            return
        self._bg.set(x, y, tile.id)
        self._bg_queue.enqueue(x, y, tile.id)

    def set_data(self, x: int, y: int, payload: Payload) -> None:
        self._check_bounds(x, y)
        tile = self.get_foreground(x, y)
        if not tile.accepts(payload):
            raise InvalidPayloadError(
                f"Tile '{tile.name}' at ({x}, {y}) does not accept {type(payload).__name__}"
            )
        # The remote authority checks metadata against the foreground it already has
        self._fg_queue.force_flush()
        raw = payload.serialize()
        self._dl.set(x, y, raw)
        self._data_queue.enqueue(x, y, raw)

    def flush(self) -> None:
        """Send every pending edit now, foregrounds first."""
        self._fg_queue.force_flush()
        self._bg_queue.force_flush()
        self._data_queue.force_flush()

    def _write_foreground(self, x: int, y: int, tile: TileDefinition) -> None:
        cls = tile.payload_class
        self._fg.set(x, y, tile.id)
        self._dl.set(x, y, cls.default().serialize() if cls is not None else None)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _get_setting(self, field: str) -> Any:
        return self._settings[field].value

    def _set_setting(self, field: str, value: Any) -> None:
        value = validate_setting(field, value)
        if self._settings[field].set(value):
            self._send_settings()

    def _send_settings(self) -> None:
        self._transport.send(Packet.OWNERINFO, [self._settings[f].shadow_value for f in SETTINGS_FIELDS])

    @property
    def name(self) -> str:
        return self._get_setting("name")

    @name.setter
    def name(self, value: str) -> None:
        self._set_setting("name", value)

    @property
    def code(self) -> str:
        return self._get_setting("code")

    @code.setter
    def code(self, value: str) -> None:
        self._set_setting("code", value)

    @property
    def category(self) -> str:
        return self._get_setting("category")

    @category.setter
    def category(self, value: str) -> None:
        self._set_setting("category", value)

    @property
    def visible(self) -> bool:
        return self._get_setting("visible")

    @visible.setter
    def visible(self, value: bool) -> None:
        self._set_setting("visible", value)

    @property
    def auto_save(self) -> bool:
        return self._get_setting("auto_save")

    @auto_save.setter
    def auto_save(self, value: bool) -> None:
        self._set_setting("auto_save", value)

    @property
    def allow_spectate(self) -> bool:
        return self._get_setting("allow_spectate")

    @allow_spectate.setter
    def allow_spectate(self, value: bool) -> None:
        self._set_setting("allow_spectate", value)

    @property
    def allow_particle_actions(self) -> bool:
        return self._get_setting("allow_particle_actions")

    @allow_particle_actions.setter
    def allow_particle_actions(self, value: bool) -> None:
        self._set_setting("allow_particle_actions", value)

    # ------------------------------------------------------------------
    # Fire-and-forget commands
    # ------------------------------------------------------------------

    def save(self) -> None:
        self._transport.send(Packet.SAVEROOM)

    def clear(self) -> None:
        self._transport.send(Packet.CLEARROOM)

    def load(self) -> None:
        self._transport.send(Packet.LOADROOM)

    def reset_participants(self) -> None:
        self._transport.send(Packet.RESETPLAYERS)

    def set_drag_enabled(self, enabled: bool) -> None:
        self._transport.send(Packet.NODRAG, not enabled)

    def set_key_active(self, key: str, active: bool) -> None:
        tile_id = self._catalog.foreground_id(_key_name(key))
        self._transport.send(Packet.ACTIVATEKEY, [tile_id, bool(active)])

    # ------------------------------------------------------------------
    # Authoritative inbound handlers
    # ------------------------------------------------------------------

    def _on_foreground_info(self, data: list[Any]) -> None:
        x, y, tile_id, pid = data
        participant = self._roster.get(pid)
        tile = self._catalog.foreground(tile_id)
        self._write_foreground(x, y, tile)
        self._bus.publish(RoomEvent(RoomEventType.FOREGROUND_CHANGED, participant, x, y, tile))

    def _on_background_info(self, data: list[Any]) -> None:
        x, y, tile_id, pid = data
        participant = self._roster.get(pid)
        self._bg.set(x, y, tile_id)
        self._bus.publish(RoomEvent(RoomEventType.BACKGROUND_CHANGED, participant, x, y, self._catalog.background(tile_id)))

    def _on_data_info(self, data: list[Any]) -> None:
        x, y, raw, pid = data
        participant = self._roster.get(pid)
        tile = self.get_foreground(x, y)
        cls = tile.payload_class
        if cls is None:
            raise InvalidPayloadError(f"Tile '{tile.name}' at ({x}, {y}) takes no metadata")
        payload = cls.from_serialized(raw)
        self._dl.set(x, y, payload.serialize())
        self._bus.publish(RoomEvent(RoomEventType.DATA_CHANGED, participant, x, y, payload))

    def _deactivate_all_keys(self) -> None:
        for key in sorted(self._active_keys):
            self._deactivate_key(key)

    def _install(self, fg: Grid, bg: Grid, dl: MetadataLayer, gold: int, blue: int) -> None:
        self._fg = fg
        self._bg = bg
        self._dl = dl
        self._gold_coin_count = gold
        self._blue_coin_count = blue

    def _on_load(self, data: list[Any]) -> None:
        c_fg, c_bg, c_dl, gold, blue = data
        fg = decode_grid(c_fg, self._width, self._height)
        bg = decode_grid(c_bg, self._width, self._height)
        dl = decode_metadata_layer(c_dl, self._width, self._height)
        self._deactivate_all_keys()
        self._install(fg, bg, dl, gold, blue)
        logger.info("Room reloaded from save (%d gold, %d blue coins)", gold, blue)
        self._bus.publish(RoomEvent(RoomEventType.ROOM_LOADED))

    def _on_clear(self, data: Any = None) -> None:
        boundary = self._catalog.foreground_id(self._config.boundary_tile)
        self._deactivate_all_keys()
        self._install(*cleared_grids(self._width, self._height, boundary), 0, 0)
        logger.info("Room cleared")
        self._bus.publish(RoomEvent(RoomEventType.ROOM_CLEARED))

    def _on_save(self, autosaved: Any = None) -> None:
        self._bus.publish(RoomEvent(RoomEventType.ROOM_SAVED, value=bool(autosaved)))

    def _on_owner_info(self, data: list[Any]) -> None:
        code, category, visible, auto_save = data
        self._settings["code"].set(code)
        self._settings["category"].set(category)
        self._settings["visible"].set(visible)
        self._settings["auto_save"].set(auto_save)

    def _on_update_info(self, data: list[Any]) -> None:
        name, allow_spectate, allow_particle_actions = data
        self._settings["name"].set(name)
        self._settings["allow_spectate"].set(allow_spectate)
        self._settings["allow_particle_actions"].set(allow_particle_actions)

    def _on_play_count(self, plays: int) -> None:
        self._plays.set(plays)

    def _on_activate_key(self, data: list[Any]) -> None:
        pid, _, tile_id = data
        name = self._catalog.foreground(tile_id).name
        self._active_keys.add(name)
        self._bus.publish(RoomEvent(RoomEventType.KEY_ACTIVATED, self._roster.get(pid), value=name))

    def _on_key_status(self, data: list[Any]) -> None:
        self._deactivate_key(self._catalog.foreground(data[0]).name)

    def _deactivate_key(self, name: str) -> None:
        self._active_keys.discard(name)
        self._bus.publish(RoomEvent(RoomEventType.KEY_DEACTIVATED, value=name))

    def _on_coin_delta(self, data: list[Any], delta: int) -> None:
        pid, _, kind = data[:3]
        if len(data) > 3:
            delta = data[3]
        participant = self._roster.get(pid)
        kind = CoinKind(kind)
        if participant is None:
            logger.warning("Coin delta for unknown participant %r", pid)
            return
        total = participant.apply_coin_delta(kind, delta)
        self._bus.publish(RoomEvent(RoomEventType.COIN_CHANGED, participant, value=(kind, delta, total)))

    def _on_add_coin(self, data: list[Any]) -> None:
        self._on_coin_delta(data, 1)

    def _on_remove_coin(self, data: list[Any]) -> None:
        self._on_coin_delta(data, -1)

    def _on_crown(self, pid: int | None) -> None:
        self._set_gold_crown_player(self._roster.get(pid))

    def _on_player_leave(self, data: list[Any]) -> None:
        if self._gold_crown_player is not None and self._gold_crown_player.id == data[0]:
            self._set_gold_crown_player(None)

    def _set_gold_crown_player(self, participant: Participant | None) -> None:
        self._gold_crown_player = participant
        self._bus.publish(RoomEvent(RoomEventType.GOLD_CROWN_CHANGED, participant))


def _key_name(key: Any) -> str:
    # Accepts a Key member or a plain trigger name
    return key.value if isinstance(key, Enum) else key
