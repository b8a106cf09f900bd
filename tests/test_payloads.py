"""Tests for the structured metadata payloads and their packing rules.

Covers:
- serialize / from_serialized inverse over the legal ranges
- constructor validation (types and ranges)
- documented packings (portal, vanish default)
"""

import zlib

import pytest

from tilemirror.core.codec import decode_metadata_layer
from tilemirror.core.enums import Direction, MetadataKind
from tilemirror.core.errors import InvalidPayloadError
from tilemirror.core.payloads import (
    NumberPayload,
    PortalPayload,
    TextPayload,
    VanishPayload,
    payload_for_kind,
    utf16_length,
)


class TestNumberPayload:

    def test_round_trip_full_range(self):
        for value in range(0, NumberPayload.MAX_VALUE + 1):
            p = NumberPayload(value)
            assert NumberPayload.from_serialized(p.serialize()) == p

    def test_default(self):
        assert NumberPayload.default().serialize() == 0

    @pytest.mark.parametrize("bad", [-1, 16384, 1.5, "3", True, None])
    def test_rejects_invalid(self, bad):
        with pytest.raises(InvalidPayloadError):
            NumberPayload(bad)

    def test_immutable(self):
        p = NumberPayload(5)
        with pytest.raises(Exception):
            p.value = 6  # type: ignore[misc]


class TestVanishPayload:

    def test_round_trip_full_range(self):
        for vanished in range(1, 256):
            for reappeared in (1, 2, 127, 254, 255):
                p = VanishPayload(vanished, reappeared)
                assert VanishPayload.from_serialized(p.serialize()) == p

    def test_packing(self):
        assert VanishPayload(3, 7).serialize() == (3 << 8) | 7

    def test_default_is_one_one(self):
        assert VanishPayload.default() == VanishPayload(1, 1)
        assert VanishPayload.default().serialize() == 0x0101

    @pytest.mark.parametrize("args", [(0, 1), (1, 0), (256, 1), (1, 256), ("1", 1)])
    def test_rejects_out_of_range(self, args):
        with pytest.raises(InvalidPayloadError):
            VanishPayload(*args)

    def test_from_serialized_rejects_string(self):
        with pytest.raises(InvalidPayloadError):
            VanishPayload.from_serialized("257")


class TestPortalPayload:

    def test_documented_packing(self):
        p = PortalPayload(my_id=5, destination_id=10, direction=Direction.RIGHT)
        assert p.serialize() == 2 | (5 << 2) | (10 << 17) == 1310742

    def test_from_serialized_reconstructs(self):
        p = PortalPayload.from_serialized(1310742)
        assert (p.my_id, p.destination_id, p.direction) == (5, 10, Direction.RIGHT)

    def test_round_trip_extremes(self):
        for my_id in (0, 1, 16384, 32767):
            for dest in (0, 1, 16384, 32767):
                for direction in Direction:
                    p = PortalPayload(my_id, dest, direction)
                    raw = p.serialize()
                    assert 0 <= raw < 2 ** 32
                    assert PortalPayload.from_serialized(raw) == p

    def test_int_direction_is_coerced(self):
        p = PortalPayload(1, 2, 3)
        assert p.direction is Direction.DOWN

    @pytest.mark.parametrize("args", [(-1, 0, 0), (32768, 0, 0), (0, 32768, 0), (0, 0, 4), (0, 0, True), (0, 0, "UP")])
    def test_rejects_invalid(self, args):
        with pytest.raises(InvalidPayloadError):
            PortalPayload(*args)

    def test_default(self):
        assert PortalPayload.default() == PortalPayload(0, 0, Direction.LEFT)


class TestTextPayload:

    def test_round_trip(self):
        for text in (" ", "hello", "x" * 255, "café", "\U0001F600" * 127):
            p = TextPayload(text)
            assert TextPayload.from_serialized(p.serialize()) == p

    def test_length_in_utf16_code_units(self):
        # One astral character is two UTF-16 code units
        assert utf16_length("\U0001F600") == 2
        with pytest.raises(InvalidPayloadError):
            TextPayload("\U0001F600" * 128)

    def test_lone_surrogate_from_wire(self):
        layer = decode_metadata_layer(zlib.compress(bytes([0x02, 0x01, 0x00, 0xD8])), 1, 1)
        raw = layer.get(0, 0)
        assert raw == "\ud800"
        p = TextPayload.from_serialized(raw)
        assert utf16_length(p.text) == 1
        assert p.serialize() == raw

    @pytest.mark.parametrize("bad", ["", "x" * 256, 12, None])
    def test_rejects_invalid(self, bad):
        with pytest.raises(InvalidPayloadError):
            TextPayload(bad)

    def test_default_is_single_space(self):
        assert TextPayload.default().text == " "


class TestKindLookup:

    def test_payload_for_kind(self):
        assert payload_for_kind(MetadataKind.NUMBER) is NumberPayload
        assert payload_for_kind(MetadataKind.VANISH) is VanishPayload
        assert payload_for_kind(MetadataKind.PORTAL) is PortalPayload
        assert payload_for_kind(MetadataKind.TEXT) is TextPayload
        assert payload_for_kind(MetadataKind.NONE) is None

    def test_kind_attribute(self):
        assert NumberPayload(1).kind == MetadataKind.NUMBER
        assert TextPayload("a").kind == MetadataKind.TEXT
