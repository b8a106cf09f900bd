"""Error hierarchy. Every error is raised synchronously to the offending caller."""

from __future__ import annotations


class TileMirrorError(Exception):
    """Base class for all mirror errors."""


class LocationOutOfBoundsError(TileMirrorError, IndexError):
    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"Location ({x}, {y}) is outside the room bounds {width}x{height}")
        self.x = x
        self.y = y


class TileNotPlaceableError(TileMirrorError, ValueError):
    def __init__(self, tile_name: str) -> None:
        super().__init__(f"Tile '{tile_name}' is not placeable")
        self.tile_name = tile_name


class InvalidPayloadError(TileMirrorError, ValueError):
    """Malformed payload arguments, or a payload kind the target cell does not accept."""


class ValidationError(TileMirrorError, ValueError):
    """A scalar room property violated its type, length or membership constraint."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field


class CorruptGridError(TileMirrorError, ValueError):
    """Compressed grid or metadata buffer inconsistent with the declared dimensions."""


class UnknownTileError(TileMirrorError, KeyError):
    def __init__(self, layer: str, name: str | int) -> None:
        super().__init__(f"Unknown {layer} '{name}'")
        self.layer = layer
        self.name = name

    def __str__(self) -> str:
        return str(self.args[0])
