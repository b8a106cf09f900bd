"""How the API gets at a mirror: capture-backed wiring and the request dependency."""

from __future__ import annotations

from pathlib import Path

from fastapi import HTTPException, Request

from tilemirror.api.mirror_manager import MirrorManager
from tilemirror.config import MirrorConfig
from tilemirror.net.capture import load_capture
from tilemirror.net.scheduler import ManualScheduler
from tilemirror.net.session import Session
from tilemirror.net.transport import LoopbackTransport


def open_capture(path: str | Path, config: MirrorConfig | None = None) -> MirrorManager:
    """Mirror a captured join offline, over a loopback transport and a manual clock."""
    catalog, joined = load_capture(path)
    session = Session(LoopbackTransport(), catalog, joined, ManualScheduler(), config)
    return MirrorManager(session)


def get_mirror_manager(request: Request) -> MirrorManager:
    manager: MirrorManager | None = getattr(request.app.state, "mirror_manager", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="No mirror attached to this app")
    return manager
