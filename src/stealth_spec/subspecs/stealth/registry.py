"""
Claim registry contract and the claim path.

Double-withdrawal protection is owned by an external registry, not by the
cryptographic core. The registry records which stealth addresses have been
claimed and enforces at-most-once claiming.

`claim_stealth_key` is the recovery path a custody service runs before sweeping
funds. It checks the registry, recovers and validates the key, and marks the
address claimed only once recovery has succeeded.
"""

from __future__ import annotations

import logging
from typing import Protocol

from stealth_spec.types import AlreadyClaimedError, Bytes20

from .announcement import Announcement
from .keys import StealthKeyPair
from .recovery import recover_stealth_key

logger = logging.getLogger(__name__)


class ClaimRegistry(Protocol):
    """
    Protocol for double-claim protection.

    Implementations must enforce at-most-once semantics on `mark_claimed`.
    """

    def is_claimed(self, address: Bytes20) -> bool:
        """Whether the address has already been claimed."""
        ...

    def mark_claimed(self, address: Bytes20) -> None:
        """
        Record a claim.

        Raises:
            AlreadyClaimedError: If the address was already claimed.
        """
        ...


class InMemoryClaimRegistry:
    """An in-process claim registry backed by a set."""

    def __init__(self) -> None:
        self._claimed: set[bytes] = set()

    def is_claimed(self, address: Bytes20) -> bool:
        """Whether the address has already been claimed."""
        return bytes(address) in self._claimed

    def mark_claimed(self, address: Bytes20) -> None:
        """Record a claim, rejecting a second claim of the same address."""
        if bytes(address) in self._claimed:
            raise AlreadyClaimedError(bytes(address))
        self._claimed.add(bytes(address))


def claim_stealth_key(
    registry: ClaimRegistry,
    announcement: Announcement,
    spend_priv: int,
    view_priv: int,
) -> StealthKeyPair:
    """
    Recover the key for an announcement and record the claim.

    Raises:
        AlreadyClaimedError: If the stealth address was claimed before.
        AddressMismatchError: If the announcement does not belong to these keys.
        InvalidScalarError: If a private key is out of range.
    """
    address = announcement.stealth_address
    if registry.is_claimed(address):
        raise AlreadyClaimedError(bytes(address))

    key_pair = recover_stealth_key(address, announcement.ephemeral_pub, spend_priv, view_priv)
    registry.mark_claimed(address)

    logger.info("Claimed stealth address 0x%s", address.hex())
    return key_pair
