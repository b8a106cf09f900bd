"""GET /api/v1/room, /players, /events — live mirror state polled by tools."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from tilemirror.api.dependencies import get_mirror_manager
from tilemirror.api.mirror_manager import MirrorManager
from tilemirror.api.schemas import (
    EventSchema,
    EventsResponse,
    PlayerSchema,
    PlayersResponse,
    RoomResponse,
)
from tilemirror.systems.fingerprint import room_fingerprint_hex

router = APIRouter()


@router.get("/room", response_model=RoomResponse)
def get_room(manager: MirrorManager = Depends(get_mirror_manager)) -> RoomResponse:
    snap = manager.get_snapshot()
    return RoomResponse(
        name=snap.name,
        code=snap.code,
        category=snap.category,
        visible=snap.visible,
        auto_save=snap.auto_save,
        allow_spectate=snap.allow_spectate,
        allow_particle_actions=snap.allow_particle_actions,
        plays=snap.plays,
        width=snap.width,
        height=snap.height,
        gold_coin_count=snap.gold_coin_count,
        blue_coin_count=snap.blue_coin_count,
        active_keys=list(snap.active_keys),
        gold_crown_player_id=snap.gold_crown_player_id,
        fingerprint=room_fingerprint_hex(snap),
    )


@router.get("/players", response_model=PlayersResponse)
def get_players(manager: MirrorManager = Depends(get_mirror_manager)) -> PlayersResponse:
    players = [
        PlayerSchema(
            id=p.id,
            name=p.name,
            x=p.last_sent_x,
            y=p.last_sent_y,
            x_dir=p.x_dir,
            y_dir=p.y_dir,
            god=p.god,
            dead=p.dead,
            gold_coin_count=p.gold_coin_count,
            blue_coin_count=p.blue_coin_count,
        )
        for p in manager.get_players()
    ]
    return PlayersResponse(online=len(players), players=players)


@router.get("/events", response_model=EventsResponse)
def get_events(
    since: int = Query(0, ge=0, description="Return events with seq greater than this"),
    manager: MirrorManager = Depends(get_mirror_manager),
) -> EventsResponse:
    events = manager.event_log.since(since)
    return EventsResponse(
        events=[
            EventSchema(
                seq=e.seq, type=e.type, participant_id=e.participant_id,
                x=e.x, y=e.y, value=e.value,
            )
            for e in events
        ],
        last_seq=events[-1].seq if events else since,
    )
