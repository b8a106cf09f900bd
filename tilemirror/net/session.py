"""Session — wires the roster and the mirrored room onto a joined connection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from tilemirror.config import MirrorConfig
from tilemirror.core.enums import RoomEventType
from tilemirror.core.events import EventBus, RoomEvent
from tilemirror.core.room import Room
from tilemirror.core.roster import Participant, Roster
from tilemirror.net.packet import Packet

if TYPE_CHECKING:
    from tilemirror.core.tiles import TileCatalog
    from tilemirror.net.scheduler import Scheduler
    from tilemirror.net.transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinState:
    """Full room snapshot delivered once on join."""

    width: int
    height: int
    foreground: bytes
    background: bytes
    metadata: bytes
    players: tuple[tuple[Any, ...], ...] = ()
    gold_crown_player_id: int | None = None
    gold_coin_count: int = 0
    blue_coin_count: int = 0
    name: str = ""
    code: str = ""
    category: str = "none"
    visible: bool = False
    auto_save: bool = False
    allow_spectate: bool = True
    allow_particle_actions: bool = True
    plays: int = 0
    active_keys: tuple[int, ...] = field(default_factory=tuple)

    @classmethod
    def from_wire(cls, data: list[Any]) -> JoinState:
        """Positional JOINED payload, in the order the remote authority sends it."""
        (width, height, c_fg, c_bg, c_dl, players, crown, gold, blue,
         name, code, category, visible, auto_save, allow_spectate,
         allow_particle_actions, plays, active_keys) = data
        return cls(
            width=width,
            height=height,
            foreground=bytes(c_fg),
            background=bytes(c_bg),
            metadata=bytes(c_dl),
            players=tuple(tuple(p) for p in players),
            gold_crown_player_id=crown,
            gold_coin_count=gold,
            blue_coin_count=blue,
            name=name,
            code=code,
            category=category,
            visible=visible,
            auto_save=auto_save,
            allow_spectate=allow_spectate,
            allow_particle_actions=allow_particle_actions,
            plays=plays,
            active_keys=tuple(active_keys),
        )

    def settings(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "code": self.code,
            "category": self.category,
            "visible": self.visible,
            "auto_save": self.auto_save,
            "allow_spectate": self.allow_spectate,
            "allow_particle_actions": self.allow_particle_actions,
        }


class Session:
    """Owns the event bus, the roster and the room for one joined connection.

    Handlers are registered roster-first so that a LEAVE removes the
    participant before the room clears a crown it may hold.
    """

    def __init__(
        self,
        transport: Transport,
        catalog: TileCatalog,
        joined: JoinState,
        scheduler: Scheduler,
        config: MirrorConfig | None = None,
        bus: EventBus | None = None,
    ) -> None:
        self.config = config or MirrorConfig()
        self.bus = bus or EventBus()
        self.catalog = catalog
        self._transport = transport

        transport.on(Packet.KICK, self._on_kick)

        self.roster = Roster(transport, self.bus)
        self.roster.attach()
        for data in joined.players:
            self.roster.add(Participant.from_wire(list(data)))

        self.room = Room(
            catalog=catalog,
            transport=transport,
            scheduler=scheduler,
            bus=self.bus,
            roster=self.roster,
            config=self.config,
            width=joined.width,
            height=joined.height,
            foreground=joined.foreground,
            background=joined.background,
            metadata=joined.metadata,
            settings=joined.settings(),
            plays=joined.plays,
            active_keys=joined.active_keys,
            gold_coin_count=joined.gold_coin_count,
            blue_coin_count=joined.blue_coin_count,
            gold_crown_player=self.roster.get(joined.gold_crown_player_id),
        )
        self.room.attach()
        logger.info("Session ready: %d participant(s) online", len(self.roster))

    def _on_kick(self, message: Any) -> None:
        logger.warning("Kicked by remote authority: %s", message)
        self.bus.publish(RoomEvent(RoomEventType.KICKED, value=message))

    def disconnected(self) -> None:
        """Called by the connection when it ends; pending edits are dropped."""
        logger.info("Session disconnected")
        self.bus.publish(RoomEvent(RoomEventType.DISCONNECTED))
