"""Row-major tile grids and the parallel metadata layer."""

from __future__ import annotations

from typing import Iterable, Union

from tilemirror.core.errors import LocationOutOfBoundsError

RawCell = Union[int, str, None]


class Grid:
    """2D grid of uint16 tile ids backed by a flat list, index ``y * width + x``."""

    __slots__ = ("width", "height", "_tiles")

    def __init__(self, width: int, height: int, default: int = 0) -> None:
        self.width = width
        self.height = height
        self._tiles: list[int] = [default] * (width * height)

    @classmethod
    def from_ids(cls, width: int, height: int, ids: Iterable[int]) -> Grid:
        grid = cls.__new__(cls)
        grid.width = width
        grid.height = height
        grid._tiles = list(ids)
        if len(grid._tiles) != width * height:
            raise ValueError(f"Expected {width * height} ids, got {len(grid._tiles)}")
        return grid

    # -- access --

    def _idx(self, x: int, y: int) -> int:
        return y * self.width + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> int:
        """Tile id at (x, y); the empty tile 0 outside the grid."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._tiles[y * self.width + x]
        return 0

    def set(self, x: int, y: int, tile_id: int) -> None:
        if not self.in_bounds(x, y):
            raise LocationOutOfBoundsError(x, y, self.width, self.height)
        self._tiles[self._idx(x, y)] = tile_id

    def ids(self) -> tuple[int, ...]:
        return tuple(self._tiles)

    def fill_border(self, tile_id: int) -> None:
        """Frame the grid with a one-cell border of *tile_id*."""
        last_row = (self.height - 1) * self.width
        for x in range(self.width):
            self._tiles[x] = tile_id
            self._tiles[last_row + x] = tile_id
        for y in range(self.height):
            self._tiles[y * self.width] = tile_id
            self._tiles[y * self.width + self.width - 1] = tile_id

    # -- copy --

    def copy(self) -> Grid:
        new = Grid.__new__(Grid)
        new.width = self.width
        new.height = self.height
        new._tiles = list(self._tiles)
        return new

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height, self._tiles) == (other.width, other.height, other._tiles)


class MetadataLayer:
    """Untyped per-cell metadata values.

    No type is stored per cell: a value is interpreted by the payload class of
    the foreground tile currently occupying the cell.  ``None`` is the logical
    empty value.
    """

    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._cells: list[RawCell] = [None] * (width * height)

    @classmethod
    def from_values(cls, width: int, height: int, values: Iterable[RawCell]) -> MetadataLayer:
        layer = cls.__new__(cls)
        layer.width = width
        layer.height = height
        layer._cells = list(values)
        if len(layer._cells) != width * height:
            raise ValueError(f"Expected {width * height} cells, got {len(layer._cells)}")
        return layer

    def get(self, x: int, y: int) -> RawCell:
        if 0 <= x < self.width and 0 <= y < self.height:
            return self._cells[y * self.width + x]
        return None

    def set(self, x: int, y: int, value: RawCell) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise LocationOutOfBoundsError(x, y, self.width, self.height)
        self._cells[y * self.width + x] = value

    def values(self) -> tuple[RawCell, ...]:
        return tuple(self._cells)

    def copy(self) -> MetadataLayer:
        return MetadataLayer.from_values(self.width, self.height, self._cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetadataLayer):
            return NotImplemented
        return (self.width, self.height, self._cells) == (other.width, other.height, other._cells)
