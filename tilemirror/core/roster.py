"""Roster of connected participants.

Positions and directions received from peers are stored as-is; no motion is
simulated or extrapolated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterator

from tilemirror.core.enums import CoinKind, Permission, RoomEventType
from tilemirror.core.events import EventBus, RoomEvent
from tilemirror.net.packet import Packet

if TYPE_CHECKING:
    from tilemirror.net.transport import Transport

logger = logging.getLogger(__name__)


@dataclass(slots=True, eq=False)
class Participant:
    """One connected participant, mutated only by inbound roster messages."""

    id: int
    name: str
    smiley_base: int = 0
    smiley_eyes: int = 0
    smiley_mouth: int = 0
    smiley_hat: int = 0
    smiley_overlay: int = 0
    last_sent_x: float = 0.0
    last_sent_y: float = 0.0
    x_dir: int = 0
    y_dir: int = 0
    god: bool = False
    gold_coin_count: int = 0
    blue_coin_count: int = 0
    dead: bool = False

    @classmethod
    def from_wire(cls, data: list[Any]) -> Participant:
        """``[id, name, base, eyes, mouth, hat, overlay, x, y, xDir, yDir, god, gold, blue, dead]``"""
        (pid, name, base, eyes, mouth, hat, overlay,
         x, y, x_dir, y_dir, god, gold, blue, dead) = data
        return cls(pid, name, base, eyes, mouth, hat, overlay, x, y, x_dir, y_dir, god, gold, blue, dead)

    def coin_count(self, kind: CoinKind) -> int:
        return self.gold_coin_count if kind == CoinKind.GOLD else self.blue_coin_count

    def apply_coin_delta(self, kind: CoinKind, delta: int) -> int:
        if kind == CoinKind.GOLD:
            self.gold_coin_count += delta
            return self.gold_coin_count
        self.blue_coin_count += delta
        return self.blue_coin_count

    def __str__(self) -> str:
        return self.name


class Roster:
    """Participants keyed by id, kept in sync by join / leave / state messages."""

    __slots__ = ("_transport", "_bus", "_players")

    def __init__(self, transport: Transport, bus: EventBus) -> None:
        self._transport = transport
        self._bus = bus
        self._players: dict[int, Participant] = {}

    def attach(self) -> None:
        t = self._transport
        t.on(Packet.JOIN, self._on_join)
        t.on(Packet.LEAVE, self._on_leave)
        t.on(Packet.MOVE, self._on_move)
        t.on(Packet.JUMP, self._on_jump)
        t.on(Packet.GOD, self._on_god)
        t.on(Packet.TP_TO_PLAYER, self._on_teleport)
        t.on(Packet.RESPAWN, self._on_respawn)
        t.on(Packet.DIE, self._on_die)
        t.on(Packet.RESET, self._on_reset)

    # -- queries --

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Participant]:
        return iter(list(self._players.values()))

    def get(self, pid: int | None) -> Participant | None:
        if pid is None:
            return None
        return self._players.get(pid)

    def by_name(self, name: str) -> Participant | None:
        # Names are not unique; first match wins
        for p in self._players.values():
            if p.name == name:
                return p
        return None

    # -- fire-and-forget commands --

    def kick(self, participant: Participant, minutes: int, message: str) -> None:
        self._transport.send(Packet.KICK, [participant.id, minutes, message])

    def set_permission(self, participant: Participant, permission: Permission) -> None:
        self._transport.send(Packet.UPDATE_PERMS, [participant.id, int(Permission(permission))])

    # -- inbound --

    def add(self, participant: Participant) -> None:
        self._players[participant.id] = participant
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_JOINED, participant))

    def _on_join(self, data: list[Any]) -> None:
        participant = Participant.from_wire(data)
        logger.info("Participant %s (%d) joined", participant.name, participant.id)
        self.add(participant)

    def _on_leave(self, data: list[Any]) -> None:
        participant = self._players.pop(data[0], None)
        if participant is None:
            logger.warning("Leave for unknown participant %r", data[0])
            return
        logger.info("Participant %s (%d) left", participant.name, participant.id)
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_LEFT, participant))

    def _on_move(self, data: list[Any]) -> None:
        pid, x, y, x_dir, y_dir = data[:5]
        participant = self._players[pid]
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_MOVED, participant, x, y, (x_dir, y_dir)))
        participant.last_sent_x = x
        participant.last_sent_y = y
        participant.x_dir = x_dir
        participant.y_dir = y_dir

    def _on_jump(self, data: list[Any]) -> None:
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_JUMPED, self._players[data[0]]))

    def _on_god(self, data: list[Any]) -> None:
        participant = self._players[data[0]]
        participant.god = not participant.god
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_GOD_TOGGLED, participant, value=participant.god))

    def _on_teleport(self, data: list[Any]) -> None:
        src, dst = data
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_TELEPORTED, self._players.get(src), value=self._players.get(dst)))

    def _on_respawn(self, data: list[Any]) -> None:
        pid, x, y = data
        participant = self._players[pid]
        participant.dead = False
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_RESPAWNED, participant, x, y))

    def _on_die(self, data: list[Any]) -> None:
        participant = self._players[data[0]]
        participant.dead = True
        participant.x_dir = 0
        participant.y_dir = 0
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_DIED, participant))

    def _on_reset(self, data: list[Any]) -> None:
        pid, x, y = data
        participant = self._players[pid]
        participant.x_dir = 0
        participant.y_dir = 0
        participant.gold_coin_count = 0
        participant.blue_coin_count = 0
        self._bus.publish(RoomEvent(RoomEventType.PLAYER_RESET, participant, x, y))
