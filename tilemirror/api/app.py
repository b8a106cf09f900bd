"""FastAPI application factory for inspecting a mirrored room."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tilemirror.api.mirror_manager import MirrorManager
from tilemirror.api.routes import api_router

logger = logging.getLogger(__name__)


def create_app(manager: MirrorManager) -> FastAPI:
    """Build and return the inspection API bound to *manager*."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.mirror_manager = manager
        logger.info("Inspection API started for room '%s'.", manager.session.room.name)
        yield
        app.state.mirror_manager = None
        logger.info("Inspection API shutting down.")

    app = FastAPI(
        title="tilemirror",
        description=(
            "Read-only view of a mirrored tile room.\n\n"
            "- **Map** — both grids, RLE encoded\n"
            "- **State** — room settings, coins, triggers, participants and the event feed\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Map", "description": "Foreground and background grids with the tile names for their ids."},
            {"name": "State", "description": "Scalar room properties, participants and the event feed."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)
    return app
