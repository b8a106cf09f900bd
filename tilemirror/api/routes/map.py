"""GET /api/v1/map — both grids, run-length encoded."""

from __future__ import annotations

from itertools import groupby
from typing import Sequence

from fastapi import APIRouter, Depends

from tilemirror.api.dependencies import get_mirror_manager
from tilemirror.api.mirror_manager import MirrorManager
from tilemirror.api.schemas import MapResponse

router = APIRouter()


def rle_encode(ids: Sequence[int]) -> list[int]:
    """Runs over a row-major id tuple: ``[id, count, id, count, ...]``."""
    runs: list[int] = []
    for tile_id, group in groupby(ids):
        runs += (tile_id, sum(1 for _ in group))
    return runs


@router.get("/map", response_model=MapResponse)
def get_map(manager: MirrorManager = Depends(get_mirror_manager)) -> MapResponse:
    snap = manager.get_snapshot()
    fg_names, bg_names = manager.tile_names()
    return MapResponse(
        width=snap.width,
        height=snap.height,
        foreground=rle_encode(snap.foreground),
        background=rle_encode(snap.background),
        foreground_names=fg_names,
        background_names=bg_names,
    )
