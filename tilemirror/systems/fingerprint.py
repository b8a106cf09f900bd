"""Replica fingerprint using xxhash.

Two mirrors of the same room hold identical grids and metadata exactly when
their fingerprints match (up to hash collisions), which makes divergence
between a local replica and a captured reference cheap to detect.
"""

from __future__ import annotations

import struct
from typing import TYPE_CHECKING

import xxhash

if TYPE_CHECKING:
    from tilemirror.core.snapshot import RoomSnapshot

_NONE = b"\x00"
_INT = b"\x01"
_TEXT = b"\x02"


def room_fingerprint(snapshot: RoomSnapshot, seed: int = 0) -> int:
    """64-bit digest of the dimensions, both grids and the metadata layer."""
    h = xxhash.xxh64(seed=seed)
    h.update(struct.pack("<II", snapshot.width, snapshot.height))
    h.update(struct.pack(f"<{len(snapshot.foreground)}H", *snapshot.foreground))
    h.update(struct.pack(f"<{len(snapshot.background)}H", *snapshot.background))
    for value in snapshot.metadata:
        if value is None:
            h.update(_NONE)
        elif isinstance(value, str):
            encoded = value.encode("utf-16-le", errors="surrogatepass")
            h.update(_TEXT + struct.pack("<H", len(encoded)) + encoded)
        else:
            h.update(_INT + struct.pack("<Q", value))
    return h.intdigest()


def room_fingerprint_hex(snapshot: RoomSnapshot) -> str:
    return f"{room_fingerprint(snapshot):016x}"
