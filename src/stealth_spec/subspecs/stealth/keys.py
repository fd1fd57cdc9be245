"""
Key pairs and entropy for the stealth address protocol.

Long-lived spend and view keys, as well as per-payment ephemeral keys, are
all plain secp256k1 key pairs: a scalar `priv` in [1, n-1] and `pub = priv * G`.

Entropy is always supplied by the caller as a callable `(num_bytes) -> bytes`,
such as `secrets.token_bytes`. A draw that cannot produce a valid scalar is
a hard failure. There is no retry and no fallback source.
"""

from __future__ import annotations

import secrets
from typing import Callable

from pydantic import Field, model_validator

from stealth_spec.types import (
    Bytes20,
    Bytes32,
    EntropySourceFailureError,
    StrictBaseModel,
)

from ..secp256k1 import N, Point, scalar_mul_base, validate_scalar
from .config import SCALAR_SIZE

EntropySource = Callable[[int], bytes]
"""A cryptographically secure randomness source returning exactly the requested bytes."""


def draw_scalar(entropy: EntropySource) -> int:
    """
    Draw one private scalar from an entropy source.

    Exactly one draw of SCALAR_SIZE bytes is made.

    Raises:
        EntropySourceFailureError: If the source raises, returns something other
            than SCALAR_SIZE bytes, or returns a value outside [1, n-1].
    """
    try:
        raw = entropy(SCALAR_SIZE)
    except Exception as e:
        raise EntropySourceFailureError(f"entropy source raised {type(e).__name__}: {e}") from e

    if not isinstance(raw, (bytes, bytearray)):
        raise EntropySourceFailureError(f"expected bytes, got {type(raw).__name__}")
    if len(raw) != SCALAR_SIZE:
        raise EntropySourceFailureError(f"expected {SCALAR_SIZE} bytes, got {len(raw)}")

    k = int.from_bytes(raw, "big")
    if not 1 <= k < N:
        raise EntropySourceFailureError("draw is not a valid scalar in [1, n-1]")
    return k


def scalar_to_bytes(k: int) -> Bytes32:
    """Encode a scalar as 32 big-endian bytes."""
    return Bytes32(validate_scalar(k).to_bytes(SCALAR_SIZE, "big"))


def scalar_from_bytes(data: bytes) -> int:
    """
    Decode a 32-byte big-endian scalar.

    Raises:
        InvalidScalarError: If the value is 0 or >= n.
    """
    return validate_scalar(int.from_bytes(Bytes32(data), "big"))


class KeyPair(StrictBaseModel):
    """A secp256k1 key pair with `pub == priv * G`."""

    priv: int = Field(repr=False)
    """Private scalar in [1, n-1]."""

    pub: Point
    """Public point, priv * G."""

    @model_validator(mode="after")
    def check_public_key(self) -> KeyPair:
        """Reject out-of-range private keys and mismatched public keys."""
        validate_scalar(self.priv)
        if scalar_mul_base(self.priv) != self.pub:
            raise ValueError("public key does not match private key")
        return self

    @classmethod
    def from_private(cls, priv: int) -> KeyPair:
        """
        Build a key pair from a private scalar.

        Raises:
            InvalidScalarError: If priv is not in [1, n-1].
        """
        return cls(priv=priv, pub=scalar_mul_base(priv))

    @classmethod
    def generate(cls, entropy: EntropySource = secrets.token_bytes) -> KeyPair:
        """
        Generate a fresh key pair.

        Raises:
            EntropySourceFailureError: If the entropy source fails.
        """
        return cls.from_private(draw_scalar(entropy))


class StealthKeyPair(StrictBaseModel):
    """
    The one-time key pair controlling a stealth address.

    Holds `stealth_priv = (spend_priv + sh) mod n` and
    `stealth_pub = stealth_priv * G = spend_pub + sh * G`.
    """

    stealth_priv: int = Field(repr=False)
    """One-time private scalar. As sensitive as a spending key."""

    stealth_pub: Point
    """One-time public key."""

    address: Bytes20
    """Address derived from `stealth_pub`."""
