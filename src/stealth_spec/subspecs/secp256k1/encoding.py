"""
SEC1 point encodings for secp256k1.

Two fixed-width formats are supported:

- Compressed (33 bytes): 0x02 (even y) or 0x03 (odd y) || 32-byte big-endian x
- Uncompressed (65 bytes): 0x04 || 32-byte big-endian x || 32-byte big-endian y

Decoding never trusts caller-supplied structure: a compressed point has its y
recomputed from x, and an uncompressed point is checked against the curve equation.

References:
- https://www.secg.org/sec1-v2.pdf (section 2.3.3 and 2.3.4)
"""

from __future__ import annotations

from typing import Final

from stealth_spec.types import Bytes33, Bytes65, InvalidPointError

from .curve import B, P, Point, is_on_curve, require_public_key

COORDINATE_SIZE: Final = 32
"""Size of one big-endian field element in bytes."""

COMPRESSED_POINT_SIZE: Final = 33
"""Compressed secp256k1 point: 0x02/0x03 + 32-byte x coordinate."""

UNCOMPRESSED_POINT_SIZE: Final = 65
"""Uncompressed secp256k1 point: 0x04 + 32-byte x + 32-byte y."""

PREFIX_EVEN: Final = 0x02
"""Compressed prefix for an even y-coordinate."""

PREFIX_ODD: Final = 0x03
"""Compressed prefix for an odd y-coordinate."""

PREFIX_UNCOMPRESSED: Final = 0x04
"""Uncompressed prefix."""


def lift_x(x: int, odd: bool) -> Point:
    """
    Find the curve point with the given x-coordinate and y parity.

    Since p = 3 (mod 4), a square root of a is a^((p + 1) / 4) when one exists.

    Raises:
        InvalidPointError: If x is not a field element or x^3 + 7 is not a square.
    """
    if not 0 <= x < P:
        raise InvalidPointError("x-coordinate is not a field element")

    y_sq = (pow(x, 3, P) + B) % P
    y = pow(y_sq, (P + 1) // 4, P)
    if y * y % P != y_sq:
        raise InvalidPointError("x-coordinate has no corresponding curve point")

    if (y & 1) != int(odd):
        y = P - y
    return Point(x=x, y=y)


def serialize_compressed(point: Point) -> Bytes33:
    """
    Encode a finite curve point as 33 bytes.

    Raises:
        InvalidPointError: If the point is at infinity or off the curve.
    """
    require_public_key(point, "point to serialize")
    assert point.x is not None and point.y is not None

    prefix = PREFIX_ODD if point.y & 1 else PREFIX_EVEN
    return Bytes33(bytes([prefix]) + point.x.to_bytes(COORDINATE_SIZE, "big"))


def deserialize_compressed(data: bytes) -> Point:
    """
    Decode a 33-byte compressed point.

    Raises:
        InvalidPointError: On wrong length, unknown prefix, or an x with no curve point.
    """
    if len(data) != COMPRESSED_POINT_SIZE:
        raise InvalidPointError(
            f"compressed point must be {COMPRESSED_POINT_SIZE} bytes, got {len(data)}"
        )

    prefix = data[0]
    if prefix not in (PREFIX_EVEN, PREFIX_ODD):
        raise InvalidPointError(f"unknown compressed point prefix 0x{prefix:02x}")

    x = int.from_bytes(data[1:], "big")
    return lift_x(x, odd=prefix == PREFIX_ODD)


def serialize_uncompressed(point: Point) -> Bytes65:
    """
    Encode a finite curve point as 65 bytes.

    Raises:
        InvalidPointError: If the point is at infinity or off the curve.
    """
    require_public_key(point, "point to serialize")
    assert point.x is not None and point.y is not None

    return Bytes65(
        bytes([PREFIX_UNCOMPRESSED])
        + point.x.to_bytes(COORDINATE_SIZE, "big")
        + point.y.to_bytes(COORDINATE_SIZE, "big")
    )


def deserialize_uncompressed(data: bytes) -> Point:
    """
    Decode a 65-byte uncompressed point.

    Raises:
        InvalidPointError: On wrong length, wrong prefix, or coordinates not on the curve.
    """
    if len(data) != UNCOMPRESSED_POINT_SIZE:
        raise InvalidPointError(
            f"uncompressed point must be {UNCOMPRESSED_POINT_SIZE} bytes, got {len(data)}"
        )
    if data[0] != PREFIX_UNCOMPRESSED:
        raise InvalidPointError(f"unknown uncompressed point prefix 0x{data[0]:02x}")

    x = int.from_bytes(data[1 : 1 + COORDINATE_SIZE], "big")
    y = int.from_bytes(data[1 + COORDINATE_SIZE :], "big")
    if x >= P or y >= P:
        raise InvalidPointError("coordinate is not a field element")

    point = Point(x=x, y=y)
    if not is_on_curve(point):
        raise InvalidPointError("point is not on the curve")
    return point


def deserialize_point(data: bytes) -> Point:
    """
    Decode either SEC1 format, dispatching on length.

    Raises:
        InvalidPointError: If the data is neither a valid compressed nor uncompressed point.
    """
    if len(data) == UNCOMPRESSED_POINT_SIZE:
        return deserialize_uncompressed(data)
    if len(data) == COMPRESSED_POINT_SIZE:
        return deserialize_compressed(data)
    raise InvalidPointError(f"invalid point encoding length {len(data)}")
