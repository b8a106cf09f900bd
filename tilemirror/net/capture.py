"""Captured joins: a tile catalog plus one JOINED snapshot stored as JSON.

Buffers are base64 encoded.  Layout::

    {
      "tiles": [...], "backgrounds": [...],
      "joined": {"width": 3, "height": 3, "foreground": "<b64>", ...}
    }
"""

from __future__ import annotations

import base64
import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tilemirror.core.tiles import TileCatalog
from tilemirror.net.session import JoinState

logger = logging.getLogger(__name__)


class CapturedJoin(BaseModel):
    model_config = ConfigDict(extra="ignore")

    width: int = Field(gt=0)
    height: int = Field(gt=0)
    foreground: bytes
    background: bytes
    metadata: bytes
    players: list[list] = Field(default_factory=list)
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
    active_keys: list[int] = Field(default_factory=list)

    @field_validator("foreground", "background", "metadata", mode="before")
    @classmethod
    def _decode_b64(cls, v: object) -> object:
        if isinstance(v, str):
            return base64.b64decode(v)
        return v

    def to_join_state(self) -> JoinState:
        data = self.model_dump()
        data["players"] = tuple(tuple(p) for p in self.players)
        data["active_keys"] = tuple(self.active_keys)
        return JoinState(**data)


class Capture(BaseModel):
    tiles: list[dict]
    backgrounds: list[dict]
    joined: CapturedJoin


def load_capture(path: str | Path) -> tuple[TileCatalog, JoinState]:
    path = Path(path)
    capture = Capture.model_validate(json.loads(path.read_text(encoding="utf-8")))
    logger.info("Loaded capture %s (%dx%d)", path, capture.joined.width, capture.joined.height)
    return TileCatalog.from_json(capture.tiles, capture.backgrounds), capture.joined.to_join_state()


def dump_capture(path: str | Path, tiles: list[dict], backgrounds: list[dict], joined: JoinState) -> None:
    """Write *joined* in the capture format (inverse of :func:`load_capture`)."""
    payload = {
        "tiles": tiles,
        "backgrounds": backgrounds,
        "joined": {
            "width": joined.width,
            "height": joined.height,
            "foreground": _b64(joined.foreground),
            "background": _b64(joined.background),
            "metadata": _b64(joined.metadata),
            "players": [list(p) for p in joined.players],
            "gold_crown_player_id": joined.gold_crown_player_id,
            "gold_coin_count": joined.gold_coin_count,
            "blue_coin_count": joined.blue_coin_count,
            **joined.settings(),
            "plays": joined.plays,
            "active_keys": list(joined.active_keys),
        },
    }
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
