"""Pydantic response models for the inspection API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# --- Map ---

class MapResponse(BaseModel):
    width: int
    height: int
    foreground: list[int] = Field(description="RLE encoded: [id, count, id, count, ...]")
    background: list[int] = Field(description="RLE encoded: [id, count, id, count, ...]")
    foreground_names: list[str] = Field(default_factory=list)
    background_names: list[str] = Field(default_factory=list)


# --- Room ---

class RoomResponse(BaseModel):
    name: str
    code: str
    category: str
    visible: bool
    auto_save: bool
    allow_spectate: bool
    allow_particle_actions: bool
    plays: int
    width: int
    height: int
    gold_coin_count: int
    blue_coin_count: int
    active_keys: list[str] = Field(default_factory=list)
    gold_crown_player_id: int | None = None
    fingerprint: str


# --- Players ---

class PlayerSchema(BaseModel):
    id: int
    name: str
    x: float
    y: float
    x_dir: int = 0
    y_dir: int = 0
    god: bool = False
    dead: bool = False
    gold_coin_count: int = 0
    blue_coin_count: int = 0


class PlayersResponse(BaseModel):
    online: int
    players: list[PlayerSchema] = Field(default_factory=list)


# --- Events ---

class EventSchema(BaseModel):
    seq: int
    type: str
    participant_id: int | None = None
    x: float | None = None
    y: float | None = None
    value: Any = None


class EventsResponse(BaseModel):
    events: list[EventSchema] = Field(default_factory=list)
    last_seq: int = 0
