"""
Point arithmetic on the secp256k1 curve.

The curve is the short Weierstrass curve

    y^2 = x^3 + 7  (mod p)

with a prime-order group of size n generated by G. The cofactor is 1, so every
point other than the point at infinity generates the full group.

Public points are affine `Point` models. Internally all arithmetic runs on
Jacobian coordinates (X, Y, Z), representing the affine point (X/Z^2, Y/Z^3),
so that a scalar multiplication needs a single field inversion at the end.

References:
- https://www.secg.org/sec2-v2.pdf (section 2.4.1)
- https://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian-0.html
"""

from __future__ import annotations

from typing import Any, Final

from pydantic import model_validator

from stealth_spec.types import InvalidPointError, InvalidScalarError, StrictBaseModel

# =================================================================
# Curve Constants
# =================================================================

P: Final = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F
"""secp256k1 field prime."""

N: Final = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
"""secp256k1 group order."""

A: Final = 0
"""Curve coefficient a."""

B: Final = 7
"""Curve coefficient b."""

GX: Final = 0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798
"""secp256k1 generator x-coordinate."""

GY: Final = 0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8
"""secp256k1 generator y-coordinate."""

SCALAR_BITS: Final = 256
"""Number of ladder steps per scalar multiplication."""


class Point(StrictBaseModel):
    """
    An affine point on secp256k1, or the point at infinity.

    The point at infinity has both coordinates set to `None`.

    Construction only checks that coordinates are field elements.
    Curve membership is checked by `is_on_curve` and enforced wherever
    a point is consumed as a public key.
    """

    x: int | None = None
    """Affine x-coordinate in [0, p), or None for the point at infinity."""

    y: int | None = None
    """Affine y-coordinate in [0, p), or None for the point at infinity."""

    @model_validator(mode="after")
    def check_coordinates(self) -> Point:
        """Reject half-infinite points and coordinates outside the field."""
        if (self.x is None) != (self.y is None):
            raise ValueError("x and y must both be set or both be None")
        if self.x is not None and self.y is not None:
            if not (0 <= self.x < P and 0 <= self.y < P):
                raise ValueError("coordinates must be in the range [0, p)")
        return self

    @property
    def is_infinity(self) -> bool:
        """Whether this is the point at infinity."""
        return self.x is None

    def __add__(self, other: Point) -> Point:
        """Group addition."""
        return add(self, other)

    def __neg__(self) -> Point:
        """Group negation."""
        return negate(self)

    def __rmul__(self, k: int) -> Point:
        """Scalar multiplication written as `k * point`."""
        return scalar_mul(k, self)

    def __repr__(self) -> str:
        if self.is_infinity:
            return "Point(INFINITY)"
        return f"Point(x=0x{self.x:064x}, y=0x{self.y:064x})"


INFINITY: Final = Point()
"""The point at infinity, identity of the group."""

G: Final = Point(x=GX, y=GY)
"""The standard secp256k1 generator."""


# =================================================================
# Validation
# =================================================================


def validate_scalar(k: Any) -> int:
    """
    Check that `k` is a usable scalar.

    Args:
        k: Candidate scalar.

    Returns:
        The scalar, unchanged.

    Raises:
        InvalidScalarError: If `k` is not an int, or not in [1, n-1].
    """
    # bool is an int subclass; True must not silently act as the scalar 1.
    if isinstance(k, bool) or not isinstance(k, int):
        raise InvalidScalarError(k, "scalar must be an integer")
    if not 1 <= k < N:
        raise InvalidScalarError(k, "scalar must be in the range [1, n-1]")
    return k


def is_on_curve(point: Point) -> bool:
    """
    Check whether a point satisfies the curve equation.

    The point at infinity is considered to be on the curve.
    """
    if point.is_infinity:
        return True
    assert point.x is not None and point.y is not None
    return (point.y * point.y - point.x * point.x * point.x - A * point.x - B) % P == 0


def require_public_key(point: Point, name: str = "public key") -> Point:
    """
    Check that a point may be used as a public key.

    Raises:
        InvalidPointError: If the point is at infinity or off the curve.
    """
    if point.is_infinity:
        raise InvalidPointError(f"{name} is the point at infinity")
    if not is_on_curve(point):
        raise InvalidPointError(f"{name} is not on the curve")
    return point


# =================================================================
# Jacobian Arithmetic
#
# A Jacobian point is a tuple (X, Y, Z) of field elements.
# Z == 0 encodes the point at infinity.
# =================================================================

_JacobianPoint = tuple[int, int, int]

_J_INFINITY: Final[_JacobianPoint] = (1, 1, 0)


def _to_jacobian(point: Point) -> _JacobianPoint:
    if point.is_infinity:
        return _J_INFINITY
    assert point.x is not None and point.y is not None
    return (point.x, point.y, 1)


def _from_jacobian(jp: _JacobianPoint) -> Point:
    x, y, z = jp
    if z == 0:
        return INFINITY
    z_inv = pow(z, -1, P)
    z_inv2 = z_inv * z_inv % P
    return Point(x=x * z_inv2 % P, y=y * z_inv2 * z_inv % P)


def _jacobian_double(jp: _JacobianPoint) -> _JacobianPoint:
    """Point doubling for a = 0 (dbl-2009-l)."""
    x1, y1, z1 = jp
    if z1 == 0 or y1 == 0:
        return _J_INFINITY

    a = x1 * x1 % P
    b = y1 * y1 % P
    c = b * b % P
    d = 2 * ((x1 + b) * (x1 + b) - a - c) % P
    e = 3 * a % P
    f = e * e % P

    x3 = (f - 2 * d) % P
    y3 = (e * (d - x3) - 8 * c) % P
    z3 = 2 * y1 * z1 % P
    return (x3, y3, z3)


def _jacobian_add(jp: _JacobianPoint, jq: _JacobianPoint) -> _JacobianPoint:
    """Point addition (add-2007-bl), falling back to doubling when jp == jq."""
    x1, y1, z1 = jp
    x2, y2, z2 = jq
    if z1 == 0:
        return jq
    if z2 == 0:
        return jp

    z1z1 = z1 * z1 % P
    z2z2 = z2 * z2 % P
    u1 = x1 * z2z2 % P
    u2 = x2 * z1z1 % P
    s1 = y1 * z2 * z2z2 % P
    s2 = y2 * z1 * z1z1 % P

    if u1 == u2:
        # Same x: either the same point or its negation.
        if s1 != s2:
            return _J_INFINITY
        return _jacobian_double(jp)

    h = (u2 - u1) % P
    i = (2 * h) * (2 * h) % P
    j = h * i % P
    r = 2 * (s2 - s1) % P
    v = u1 * i % P

    x3 = (r * r - j - 2 * v) % P
    y3 = (r * (v - x3) - 2 * s1 * j) % P
    z3 = ((z1 + z2) * (z1 + z2) - z1z1 - z2z2) * h % P
    return (x3, y3, z3)


def _ladder(k: int, point: Point) -> Point:
    """
    Montgomery ladder over all SCALAR_BITS bits of `k`.

    Every step performs exactly one addition and one doubling whatever the
    bit value, so the sequence of group operations does not depend on the scalar.
    Invariant: r1 - r0 == point after every step.
    """
    r0 = _J_INFINITY
    r1 = _to_jacobian(point)
    for i in reversed(range(SCALAR_BITS)):
        bit = (k >> i) & 1
        if bit:
            r0, r1 = r1, r0
        r1 = _jacobian_add(r0, r1)
        r0 = _jacobian_double(r0)
        if bit:
            r0, r1 = r1, r0
    return _from_jacobian(r0)


# =================================================================
# Public Operations
# =================================================================


def add(p: Point, q: Point) -> Point:
    """
    Add two curve points.

    Either operand may be the point at infinity, in which case the other
    operand is returned unchanged.

    Raises:
        InvalidPointError: If a finite operand is not on the curve.
    """
    if p.is_infinity:
        return q
    if q.is_infinity:
        return p
    require_public_key(p, "left operand")
    require_public_key(q, "right operand")
    return _from_jacobian(_jacobian_add(_to_jacobian(p), _to_jacobian(q)))


def negate(p: Point) -> Point:
    """Return -p, the reflection of p across the x-axis."""
    if p.is_infinity:
        return INFINITY
    assert p.x is not None and p.y is not None
    return Point(x=p.x, y=(-p.y) % P)


def scalar_mul(k: int, point: Point) -> Point:
    """
    Compute k * point.

    Args:
        k: Scalar in [1, n-1].
        point: A finite point on the curve.

    Returns:
        The product, never the point at infinity for valid inputs.

    Raises:
        InvalidScalarError: If k is 0, negative, or >= n.
        InvalidPointError: If point is at infinity or off the curve.
    """
    validate_scalar(k)
    require_public_key(point, "multiplicand")
    return _ladder(k, point)


def scalar_mul_base(k: int) -> Point:
    """
    Compute k * G.

    Raises:
        InvalidScalarError: If k is 0, negative, or >= n.
    """
    validate_scalar(k)
    return _ladder(k, G)
