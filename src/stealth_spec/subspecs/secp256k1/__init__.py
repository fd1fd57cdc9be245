"""
secp256k1 Curve Engine

Affine points, group arithmetic and SEC1 serialization on the secp256k1 curve.
"""

from .curve import (
    GX,
    GY,
    INFINITY,
    N,
    P,
    G,
    Point,
    add,
    is_on_curve,
    negate,
    require_public_key,
    scalar_mul,
    scalar_mul_base,
    validate_scalar,
)
from .encoding import (
    COMPRESSED_POINT_SIZE,
    UNCOMPRESSED_POINT_SIZE,
    deserialize_compressed,
    deserialize_point,
    deserialize_uncompressed,
    lift_x,
    serialize_compressed,
    serialize_uncompressed,
)

__all__ = [
    # Constants
    "P",
    "N",
    "GX",
    "GY",
    "G",
    "INFINITY",
    "COMPRESSED_POINT_SIZE",
    "UNCOMPRESSED_POINT_SIZE",
    # Types
    "Point",
    # Arithmetic
    "add",
    "negate",
    "scalar_mul",
    "scalar_mul_base",
    "is_on_curve",
    "require_public_key",
    "validate_scalar",
    # Serialization
    "lift_x",
    "serialize_compressed",
    "deserialize_compressed",
    "serialize_uncompressed",
    "deserialize_uncompressed",
    "deserialize_point",
]
