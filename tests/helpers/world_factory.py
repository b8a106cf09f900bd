"""Builders for mirrored rooms over a loopback transport and a manual clock."""

from __future__ import annotations

from dataclasses import dataclass, field

from tilemirror.config import MirrorConfig
from tilemirror.core.codec import encode_grid, encode_metadata_layer
from tilemirror.core.events import RoomEvent
from tilemirror.core.grid import Grid, MetadataLayer
from tilemirror.core.room import Room
from tilemirror.core.tiles import TileCatalog
from tilemirror.net.scheduler import ManualScheduler
from tilemirror.net.session import JoinState, Session
from tilemirror.net.transport import LoopbackTransport

TILES_JSON: list[dict] = [
    {"name": "basic", "contents": [
        {"name": "empty"},
        {"name": "basic", "color": "aaaaaa"},
        {"name": "shiny light grey", "color": "cccccc"},
    ]},
    {"name": "logic", "contents": [
        {"name": "gold coin door", "class": "GoldCoinDoor"},
        {"name": "vanish", "class": "Vanish"},
        {"name": "portal", "class": "Portal"},
        {"name": "sign", "class": "Text"},
    ]},
    {"name": "special", "contents": [
        {"name": "gold crown", "placeable": False},
        {"name": "blue key"},
        {"name": "red key"},
    ]},
]

BACKGROUNDS_JSON: list[dict] = [
    {"name": "backgrounds", "contents": [
        {"name": "none"},
        {"name": "brick", "color": "884400"},
        {"name": "stone", "color": "777777"},
    ]},
]


def make_catalog() -> TileCatalog:
    return TileCatalog.from_json(TILES_JSON, BACKGROUNDS_JSON)


def player_wire(pid: int, name: str, x: float = 16.0, y: float = 16.0) -> list:
    return [pid, name, 0, 0, 0, 0, 0, x, y, 0, 0, False, 0, 0, False]


def make_join_state(
    catalog: TileCatalog,
    width: int = 8,
    height: int = 6,
    fg: Grid | None = None,
    bg: Grid | None = None,
    dl: MetadataLayer | None = None,
    active_keys: tuple[int, ...] = (),
    crown: int | None = None,
) -> JoinState:
    if fg is None:
        fg = Grid(width, height)
        fg.fill_border(catalog.foreground_id("shiny light grey"))
    return JoinState(
        width=width,
        height=height,
        foreground=encode_grid(fg),
        background=encode_grid(bg or Grid(width, height)),
        metadata=encode_metadata_layer(dl or MetadataLayer(width, height)),
        players=(tuple(player_wire(1, "alice")), tuple(player_wire(2, "bob"))),
        gold_crown_player_id=crown,
        gold_coin_count=4,
        blue_coin_count=2,
        name="Test Room",
        code="secret",
        category="platformer",
        visible=True,
        auto_save=False,
        allow_spectate=True,
        allow_particle_actions=False,
        plays=3,
        active_keys=active_keys,
    )


@dataclass
class Mirror:
    session: Session
    transport: LoopbackTransport
    scheduler: ManualScheduler
    catalog: TileCatalog
    events: list[RoomEvent] = field(default_factory=list)

    @property
    def room(self) -> Room:
        return self.session.room

    def fg(self, name: str) -> int:
        return self.catalog.foreground_id(name)

    def bg(self, name: str) -> int:
        return self.catalog.background_id(name)

    def tick(self, seconds: float = 0.01) -> int:
        return self.scheduler.advance(seconds)

    def event_types(self) -> list:
        return [e.type for e in self.events]


def make_mirror(config: MirrorConfig | None = None, **join_kwargs) -> Mirror:
    catalog = make_catalog()
    transport = LoopbackTransport()
    scheduler = ManualScheduler()
    joined = make_join_state(catalog, **join_kwargs)
    session = Session(transport, catalog, joined, scheduler, config)
    mirror = Mirror(session, transport, scheduler, catalog)
    session.bus.subscribe(mirror.events.append)
    return mirror
