"""MirrorManager — read-side wrapper the API uses to look at a live session.

API handlers run on worker threads; they only ever read immutable
RoomSnapshots and copies of the roster, never the live grids.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tilemirror.utils.event_log import EventLog

if TYPE_CHECKING:
    from tilemirror.core.roster import Participant
    from tilemirror.core.snapshot import RoomSnapshot
    from tilemirror.net.session import Session


class MirrorManager:
    __slots__ = ("_session", "event_log")

    def __init__(self, session: Session, event_log: EventLog | None = None) -> None:
        self._session = session
        self.event_log = event_log if event_log is not None else EventLog(maxlen=session.config.event_log_size)
        self.event_log.attach(session.bus)

    @property
    def session(self) -> Session:
        return self._session

    def get_snapshot(self) -> RoomSnapshot:
        return self._session.room.snapshot()

    def get_players(self) -> list[Participant]:
        return list(self._session.roster)

    def tile_names(self) -> tuple[list[str], list[str]]:
        catalog = self._session.catalog
        return [t.name for t in catalog.foregrounds], [t.name for t in catalog.backgrounds]
