"""Immutable snapshot of a mirrored room, safe to hand to other threads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tilemirror.core.grid import Grid, MetadataLayer, RawCell
    from tilemirror.core.room import Room


@dataclass(frozen=True, slots=True)
class RoomSnapshot:
    """Read-only copy of the grids, metadata and scalar properties."""

    width: int
    height: int
    foreground: tuple[int, ...]
    background: tuple[int, ...]
    metadata: tuple[RawCell, ...]
    name: str
    code: str
    category: str
    visible: bool
    auto_save: bool
    allow_spectate: bool
    allow_particle_actions: bool
    plays: int
    gold_coin_count: int
    blue_coin_count: int
    active_keys: tuple[str, ...]
    gold_crown_player_id: int | None

    @classmethod
    def from_room(cls, room: Room, fg: Grid, bg: Grid, dl: MetadataLayer) -> RoomSnapshot:
        crown = room.gold_crown_player
        return cls(
            width=room.width,
            height=room.height,
            foreground=fg.ids(),
            background=bg.ids(),
            metadata=dl.values(),
            name=room.name,
            code=room.code,
            category=room.category,
            visible=room.visible,
            auto_save=room.auto_save,
            allow_spectate=room.allow_spectate,
            allow_particle_actions=room.allow_particle_actions,
            plays=room.plays,
            gold_coin_count=room.gold_coin_count,
            blue_coin_count=room.blue_coin_count,
            active_keys=room.active_keys,
            gold_crown_player_id=crown.id if crown is not None else None,
        )

    def foreground_at(self, x: int, y: int) -> int:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.foreground[y * self.width + x]
        return 0
