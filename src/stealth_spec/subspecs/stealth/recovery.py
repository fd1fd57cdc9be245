"""
Stealth private key recovery (recipient side).

The one-time private key is the spend key shifted by the shared-secret hash:

    sh           = keccak256(uncompressed(view_priv * ephemeral_pub)) mod n
    stealth_priv = (spend_priv + sh) mod n

This mirrors the sender's point addition, since

    stealth_priv * G = spend_priv * G + sh * G = spend_pub + sh * G.

Recovery needs both private keys: the view key to rebuild sh, the spend key
to own the result.
"""

from __future__ import annotations

import logging

from stealth_spec.types import AddressMismatchError, Bytes20, InvalidScalarError

from ..secp256k1 import N, Point, scalar_mul_base, validate_scalar
from .hashing import derive_address, derive_shared_secret
from .keys import StealthKeyPair

logger = logging.getLogger(__name__)


def recover_stealth_key(
    expected_address: Bytes20,
    ephemeral_pub: Point,
    spend_priv: int,
    view_priv: int,
) -> StealthKeyPair:
    """
    Rebuild the private key controlling a stealth address.

    The derived address is always checked against `expected_address`. A key
    that does not control the expected address is never returned.

    Args:
        expected_address: The announced stealth address.
        ephemeral_pub: The announced ephemeral public key.
        spend_priv: Recipient's private spending key.
        view_priv: Recipient's private viewing key.

    Returns:
        The stealth key pair. The caller should move funds out promptly.

    Raises:
        InvalidScalarError: If a private key is out of range, or the stealth key is zero.
        InvalidPointError: If ephemeral_pub is at infinity or off the curve.
        AddressMismatchError: If the recovered key derives a different address.
    """
    validate_scalar(spend_priv)
    secret = derive_shared_secret(view_priv, ephemeral_pub)

    stealth_priv = (spend_priv + secret.sh) % N
    if stealth_priv == 0:
        raise InvalidScalarError(stealth_priv, "stealth private key reduced to zero")

    stealth_pub = scalar_mul_base(stealth_priv)
    address = derive_address(stealth_pub)

    if address != expected_address:
        raise AddressMismatchError(expected=bytes(expected_address), derived=bytes(address))

    logger.debug("Recovered stealth key for 0x%s", address.hex())

    return StealthKeyPair(stealth_priv=stealth_priv, stealth_pub=stealth_pub, address=address)
