"""Tile catalog: id <-> name <-> {placeable, metadata kind} for both layers.

The catalog is loaded once from the remote tile definitions and never
changes afterwards.  Ids are dense and assigned in catalog order, so callers
must never hardcode them; only ids received from the remote side are used.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Union

from pydantic import BaseModel, ConfigDict, Field

from tilemirror.core.enums import MetadataKind
from tilemirror.core.errors import UnknownTileError
from tilemirror.core.payloads import payload_for_kind

logger = logging.getLogger(__name__)

# Remote tile "class" -> metadata kind; unlisted classes carry no metadata
CLASS_KINDS: dict[str, MetadataKind] = {
    "Vanish": MetadataKind.VANISH,
    "GoldCoinDoor": MetadataKind.NUMBER,
    "BlueCoinDoor": MetadataKind.NUMBER,
    "GoldCoinGate": MetadataKind.NUMBER,
    "BlueCoinGate": MetadataKind.NUMBER,
    "MultipleGoldCoinDoor": MetadataKind.NUMBER,
    "MultipleBlueCoinDoor": MetadataKind.NUMBER,
    "MultipleGoldCoinGate": MetadataKind.NUMBER,
    "MultipleBlueCoinGate": MetadataKind.NUMBER,
    "Portal": MetadataKind.PORTAL,
    "Text": MetadataKind.TEXT,
}


@dataclass(frozen=True, slots=True)
class TileDefinition:
    """Immutable description of one foreground or background tile."""

    id: int
    name: str
    placeable: bool = True
    metadata_kind: MetadataKind = MetadataKind.NONE
    minimap_color: str | None = None

    @property
    def payload_class(self) -> type | None:
        return payload_for_kind(self.metadata_kind)

    def accepts(self, payload: object) -> bool:
        """Does this tile accept *payload* as its cell metadata?"""
        cls = self.payload_class
        return cls is not None and isinstance(payload, cls)

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------------
# Remote catalog JSON
# ---------------------------------------------------------------------------

class TileEntrySchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    color: str | None = None
    placeable: bool = True
    tile_class: str | None = Field(None, alias="class")


class TileCategorySchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    contents: list[TileEntrySchema] = Field(default_factory=list)


TileRef = Union[TileDefinition, str]


class TileCatalog:
    """Lookup table of foreground and background definitions."""

    __slots__ = ("_foregrounds", "_fg_by_name", "_backgrounds", "_bg_by_name")

    def __init__(self, foregrounds: Iterable[TileDefinition], backgrounds: Iterable[TileDefinition]) -> None:
        self._foregrounds: tuple[TileDefinition, ...] = tuple(foregrounds)
        self._backgrounds: tuple[TileDefinition, ...] = tuple(backgrounds)
        self._fg_by_name = {t.name: t.id for t in self._foregrounds}
        self._bg_by_name = {t.name: t.id for t in self._backgrounds}

    @classmethod
    def from_json(cls, tiles: list[dict], backgrounds: list[dict]) -> TileCatalog:
        """Build from the remote ``tiles.json`` / ``backgrounds.json`` category lists."""
        catalog = cls(_definitions(tiles), _definitions(backgrounds))
        logger.info(
            "Tile catalog loaded: %d foregrounds, %d backgrounds",
            len(catalog._foregrounds), len(catalog._backgrounds),
        )
        return catalog

    @classmethod
    def from_names(cls, foregrounds: Iterable[tuple[str, MetadataKind, bool]], backgrounds: Iterable[str]) -> TileCatalog:
        """Build from ``(name, kind, placeable)`` triples, ids in iteration order."""
        fgs = [
            TileDefinition(id=i, name=name, placeable=placeable, metadata_kind=kind)
            for i, (name, kind, placeable) in enumerate(foregrounds)
        ]
        bgs = [TileDefinition(id=i, name=name) for i, name in enumerate(backgrounds)]
        return cls(fgs, bgs)

    # -- foreground --

    @property
    def foregrounds(self) -> tuple[TileDefinition, ...]:
        return self._foregrounds

    def foreground(self, id_or_name: int | str) -> TileDefinition:
        if isinstance(id_or_name, str):
            return self._foregrounds[self.foreground_id(id_or_name)]
        return _by_id(self._foregrounds, "foreground", id_or_name)

    def foreground_id(self, name: str) -> int:
        try:
            return self._fg_by_name[name]
        except KeyError:
            raise UnknownTileError("foreground", name) from None

    def resolve_foreground(self, ref: TileRef) -> TileDefinition:
        """Catalog entry for a name or a definition; definitions must belong to this catalog."""
        if isinstance(ref, TileDefinition):
            return _own(self.foreground(ref.id), ref, "foreground")
        return self.foreground(ref)

    # -- background --

    @property
    def backgrounds(self) -> tuple[TileDefinition, ...]:
        return self._backgrounds

    def background(self, id_or_name: int | str) -> TileDefinition:
        if isinstance(id_or_name, str):
            return self._backgrounds[self.background_id(id_or_name)]
        return _by_id(self._backgrounds, "background", id_or_name)

    def background_id(self, name: str) -> int:
        try:
            return self._bg_by_name[name]
        except KeyError:
            raise UnknownTileError("background", name) from None

    def resolve_background(self, ref: TileRef) -> TileDefinition:
        if isinstance(ref, TileDefinition):
            return _own(self.background(ref.id), ref, "background")
        return self.background(ref)


def _by_id(tiles: tuple[TileDefinition, ...], layer: str, tile_id: int) -> TileDefinition:
    # Negative ids would otherwise wrap around the tuple
    if 0 <= tile_id < len(tiles):
        return tiles[tile_id]
    raise UnknownTileError(layer, tile_id)


def _own(entry: TileDefinition, ref: TileDefinition, layer: str) -> TileDefinition:
    if entry != ref:
        raise UnknownTileError(layer, ref.name)
    return entry


def _definitions(categories: list[dict]) -> list[TileDefinition]:
    result: list[TileDefinition] = []
    for raw in categories:
        category = TileCategorySchema.model_validate(raw)
        for entry in category.contents:
            result.append(TileDefinition(
                id=len(result),
                name=entry.name,
                placeable=entry.placeable,
                metadata_kind=CLASS_KINDS.get(entry.tile_class or "", MetadataKind.NONE),
                minimap_color=f"#{entry.color}" if entry.color else None,
            ))
    return result
