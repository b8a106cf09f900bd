"""Binary codec for the compressed grid buffers and the metadata layer.

Wire formats (all zlib-compressed):

  grid      width*height consecutive little-endian uint16 tile ids, row-major.
  metadata  one record per cell, row-major.  Each record is a type-tag byte
            followed by a tag-dependent body:
              NOTHING  (no body)
              UINT8    1 byte
              UINT16   2 bytes LE
              VANISH   2 bytes LE (same shape as UINT16)
              UINT32   4 bytes LE
              TEXT     1 length byte L, then L UTF-16LE code units

The metadata layer is read in one streaming, offset-tracking pass.  The tag
is consumed here and discarded; interpretation is left to the foreground tile.
"""

from __future__ import annotations

import logging
import struct
import zlib

from tilemirror.core.enums import DataLayerType
from tilemirror.core.errors import CorruptGridError
from tilemirror.core.grid import Grid, MetadataLayer, RawCell

logger = logging.getLogger(__name__)

_U8 = struct.Struct("<B")
_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


def _inflate(data: bytes, what: str) -> bytes:
    try:
        return zlib.decompress(bytes(data))
    except zlib.error as exc:
        raise CorruptGridError(f"Cannot decompress {what}: {exc}") from exc


# ---------------------------------------------------------------------------
# Grids
# ---------------------------------------------------------------------------

def decode_grid(data: bytes, width: int, height: int) -> Grid:
    """Decompress a foreground/background buffer into a Grid."""
    raw = _inflate(data, "grid")
    count = width * height
    if len(raw) != 2 * count:
        raise CorruptGridError(
            f"Grid buffer holds {len(raw)} bytes, expected {2 * count} for {width}x{height}"
        )
    return Grid.from_ids(width, height, struct.unpack(f"<{count}H", raw))


def encode_grid(grid: Grid) -> bytes:
    ids = grid.ids()
    return zlib.compress(struct.pack(f"<{len(ids)}H", *ids))


# ---------------------------------------------------------------------------
# Metadata layer
# ---------------------------------------------------------------------------

def decode_metadata_layer(data: bytes, width: int, height: int) -> MetadataLayer:
    """Decompress and scan the metadata layer, one record per cell."""
    buf = _inflate(data, "metadata layer")
    end = len(buf)
    cells: list[RawCell] = []
    offset = 0

    def need(n: int) -> None:
        if offset + n > end:
            raise CorruptGridError(
                f"Metadata layer truncated at cell {len(cells)} (offset {offset}, need {n} more bytes)"
            )

    for _ in range(width * height):
        need(1)
        tag = buf[offset]
        offset += 1

        if tag == DataLayerType.NOTHING:
            cells.append(None)
        elif tag == DataLayerType.TEXT:
            need(1)
            length = buf[offset]
            offset += 1
            need(2 * length)
            cells.append(buf[offset:offset + 2 * length].decode("utf-16-le", errors="surrogatepass"))
            offset += 2 * length
        elif tag == DataLayerType.UINT8:
            need(1)
            cells.append(buf[offset])
            offset += 1
        elif tag in (DataLayerType.UINT16, DataLayerType.VANISH):
            need(2)
            cells.append(_U16.unpack_from(buf, offset)[0])
            offset += 2
        elif tag == DataLayerType.UINT32:
            need(4)
            cells.append(_U32.unpack_from(buf, offset)[0])
            offset += 4
        else:
            raise CorruptGridError(f"Unknown metadata tag {tag} at offset {offset - 1}")

    if offset != end:
        raise CorruptGridError(f"Metadata layer has {end - offset} trailing bytes")
    return MetadataLayer.from_values(width, height, cells)


def encode_metadata_layer(layer: MetadataLayer) -> bytes:
    """Inverse of :func:`decode_metadata_layer`, narrowest integer tag per cell."""
    out = bytearray()
    for value in layer.values():
        if value is None:
            out += _U8.pack(DataLayerType.NOTHING)
        elif isinstance(value, str):
            encoded = value.encode("utf-16-le", errors="surrogatepass")
            units = len(encoded) // 2
            if units > 0xFF:
                raise ValueError(f"Text cell too long for the wire: {units} code units")
            out += _U8.pack(DataLayerType.TEXT) + _U8.pack(units) + encoded
        elif value <= 0xFF:
            out += _U8.pack(DataLayerType.UINT8) + _U8.pack(value)
        elif value <= 0xFFFF:
            out += _U8.pack(DataLayerType.UINT16) + _U16.pack(value)
        else:
            out += _U8.pack(DataLayerType.UINT32) + _U32.pack(value)
    return zlib.compress(bytes(out))


# ---------------------------------------------------------------------------
# Synthetic cleared room
# ---------------------------------------------------------------------------

def cleared_grids(width: int, height: int, boundary_id: int) -> tuple[Grid, Grid, MetadataLayer]:
    """Foreground framed by *boundary_id*, empty background, empty metadata."""
    foreground = Grid(width, height)
    foreground.fill_border(boundary_id)
    logger.debug("Synthesized cleared %dx%d room (boundary id %d)", width, height, boundary_id)
    return foreground, Grid(width, height), MetadataLayer(width, height)


def encode_cleared_room(width: int, height: int, boundary_id: int) -> tuple[bytes, bytes, bytes]:
    """Compressed buffers of a cleared room, in the snapshot wire format."""
    foreground, background, metadata = cleared_grids(width, height, boundary_id)
    return encode_grid(foreground), encode_grid(background), encode_metadata_layer(metadata)
