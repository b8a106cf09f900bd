"""Versioned API route modules."""

from fastapi import APIRouter

from tilemirror.api.routes.map import router as map_router
from tilemirror.api.routes.state import router as state_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(map_router, tags=["Map"])
api_router.include_router(state_router, tags=["State"])

__all__ = ["api_router"]
