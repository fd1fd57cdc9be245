"""
Stealth address generation (sender side).

Given a recipient's meta-address (spend_pub, view_pub), the sender computes:

1. ephem_priv  <- fresh scalar from the caller's entropy source
2. ephem_pub   =  ephem_priv * G
3. shared      =  ephem_priv * view_pub
4. sh, tag     =  keccak256(uncompressed(shared)) mod n, first byte of the digest
5. stealth_pub =  spend_pub + sh * G
6. address     =  keccak256(uncompressed(stealth_pub))[-20:]

Only (address, ephem_pub, tag) leave this module. The ephemeral private key
goes out of scope when the call returns.
"""

from __future__ import annotations

import logging
import secrets

from stealth_spec.types import Bytes1, Bytes20, StrictBaseModel

from ..secp256k1 import Point, add, scalar_mul_base
from .announcement import Announcement
from .hashing import derive_address, derive_shared_secret
from .keys import EntropySource, draw_scalar
from .meta_address import MetaAddress

logger = logging.getLogger(__name__)


class GeneratedStealthAddress(StrictBaseModel):
    """The result of generating a stealth address for a recipient."""

    address: Bytes20
    """One-time stealth address to pay."""

    ephemeral_pub: Point
    """Ephemeral public key the recipient needs to find and spend the payment."""

    view_tag: Bytes1
    """One-byte scanning hint."""

    def to_announcement(self, metadata: bytes = b"") -> Announcement:
        """Build the announcement to publish for this payment."""
        return Announcement(
            stealth_address=self.address,
            ephemeral_pub=self.ephemeral_pub,
            view_tag=self.view_tag,
            metadata=metadata,
        )


def generate_stealth_address(
    meta: MetaAddress,
    entropy: EntropySource = secrets.token_bytes,
) -> GeneratedStealthAddress:
    """
    Generate a one-time stealth address for the owner of `meta`.

    Args:
        meta: Recipient meta-address.
        entropy: Cryptographically secure source for the ephemeral key.
            Fixing it makes the output deterministic.

    Returns:
        The stealth address, ephemeral public key, and view tag.

    Raises:
        EntropySourceFailureError: If no valid ephemeral scalar can be drawn.
        InvalidScalarError: If the shared-secret hash reduces to zero.
    """
    ephem_priv = draw_scalar(entropy)
    ephemeral_pub = scalar_mul_base(ephem_priv)

    secret = derive_shared_secret(ephem_priv, meta.view_pub)
    stealth_pub = add(meta.spend_pub, scalar_mul_base(secret.sh))
    address = derive_address(stealth_pub)

    logger.debug("Generated stealth address 0x%s", address.hex())

    return GeneratedStealthAddress(
        address=address,
        ephemeral_pub=ephemeral_pub,
        view_tag=secret.view_tag,
    )
