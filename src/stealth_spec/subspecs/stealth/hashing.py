"""
Hashing for the stealth address protocol.

The protocol hashes with Keccak-256, the same function Ethereum uses for
account addresses. Two values are derived from it:

- The shared-secret hash of an ECDH point:

      digest   = keccak256(0x04 || x || y)
      sh       = int(digest) mod n
      view_tag = digest[0]

  The view tag is taken from the digest before reduction.

- The stealth address of a public key:

      address = keccak256(0x04 || x || y)[-20:]
"""

from __future__ import annotations

from Crypto.Hash import keccak

from stealth_spec.types import (
    Bytes1,
    Bytes20,
    Bytes32,
    InvalidScalarError,
    StrictBaseModel,
)

from ..secp256k1 import N, Point, scalar_mul, serialize_uncompressed
from .config import STEALTH_ADDRESS_SIZE, VIEW_TAG_SIZE


def keccak256(data: bytes) -> Bytes32:
    """Compute the Keccak-256 digest (pre-NIST padding, as used by Ethereum)."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return Bytes32(k.digest())


class SharedSecret(StrictBaseModel):
    """The hashed ECDH secret shared by a sender and a recipient."""

    sh: int
    """Shared-secret hash reduced modulo n, in [1, n-1]."""

    view_tag: Bytes1
    """Most significant byte of the unreduced hash."""

    def __repr__(self) -> str:
        return f"SharedSecret(view_tag={self.view_tag.hex()})"


def hash_shared_point(shared_point: Point) -> SharedSecret:
    """
    Hash an ECDH point into the shared-secret scalar and its view tag.

    Raises:
        InvalidPointError: If the point is at infinity or off the curve.
        InvalidScalarError: If the hash reduces to zero modulo n.
    """
    digest = keccak256(serialize_uncompressed(shared_point))

    sh = int.from_bytes(digest, "big") % N
    if sh == 0:
        raise InvalidScalarError(sh, "shared-secret hash reduced to zero")

    return SharedSecret(sh=sh, view_tag=Bytes1(digest[:VIEW_TAG_SIZE]))


def derive_shared_secret(private_key: int, public_key: Point) -> SharedSecret:
    """
    Run ECDH and hash the result.

    Both directions give the same value:

        derive_shared_secret(ephem_priv, view_pub) == derive_shared_secret(view_priv, ephem_pub)

    Raises:
        InvalidScalarError: If the private key is not in [1, n-1].
        InvalidPointError: If the public key is at infinity or off the curve.
    """
    return hash_shared_point(scalar_mul(private_key, public_key))


def derive_address(public_key: Point) -> Bytes20:
    """
    Derive the 20-byte address controlled by a public key.

    Raises:
        InvalidPointError: If the public key is at infinity or off the curve.
    """
    digest = keccak256(serialize_uncompressed(public_key))
    return Bytes20(digest[-STEALTH_ADDRESS_SIZE:])
