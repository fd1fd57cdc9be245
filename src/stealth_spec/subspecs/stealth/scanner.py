"""
Stealth address scanning (recipient side).

A recipient holding view_priv and spend_pub decides whether an announcement
(address, ephemeral_pub, view_tag) pays them:

    shared      = view_priv * ephemeral_pub
    sh, tag     = keccak256(uncompressed(shared)) mod n, first byte of the digest
    stealth_pub = spend_pub + sh * G
    owned       = keccak256(uncompressed(stealth_pub))[-20:] == address

The view tag lets most foreign announcements be rejected right after the
shared-secret hash, skipping the base multiplication, the point addition and
the address hash. A tag mismatch is a certain rejection. A tag match only
means the announcement survives a 1-in-256 filter.
"""

from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from functools import partial
from typing import Iterable, Sequence

from stealth_spec.types import Bytes1, Bytes20

from ..secp256k1 import Point, add, require_public_key, scalar_mul_base
from .announcement import Announcement
from .config import DEFAULT_SCAN_CONFIG, ScanConfig
from .hashing import derive_address, derive_shared_secret

logger = logging.getLogger(__name__)


def check_ownership(
    candidate_address: Bytes20,
    ephemeral_pub: Point,
    view_priv: int,
    spend_pub: Point,
    tag_hint: Bytes1 | None = None,
) -> bool:
    """
    Check whether a stealth address belongs to the holder of `view_priv`.

    Args:
        candidate_address: Announced stealth address.
        ephemeral_pub: Announced ephemeral public key.
        view_priv: Recipient's private viewing key.
        spend_pub: Recipient's public spending key.
        tag_hint: Announced view tag. When given, a mismatch returns False early.

    Returns:
        True if the address derives from this recipient's keys.

    Raises:
        InvalidScalarError: If view_priv is not in [1, n-1].
        InvalidPointError: If a public key is at infinity or off the curve.
    """
    require_public_key(spend_pub, "spend public key")

    secret = derive_shared_secret(view_priv, ephemeral_pub)
    if tag_hint is not None and secret.view_tag != tag_hint:
        return False

    stealth_pub = add(spend_pub, scalar_mul_base(secret.sh))
    return derive_address(stealth_pub) == candidate_address


def _scan_chunk(
    view_priv: int,
    spend_pub: Point,
    use_view_tags: bool,
    chunk: Sequence[tuple[int, Announcement]],
) -> list[int]:
    """Return the indices of owned announcements (module-level for pickling)."""
    return [
        index
        for index, announcement in chunk
        if check_ownership(
            announcement.stealth_address,
            announcement.ephemeral_pub,
            view_priv,
            spend_pub,
            announcement.view_tag if use_view_tags else None,
        )
    ]


def scan_announcements(
    announcements: Iterable[Announcement],
    view_priv: int,
    spend_pub: Point,
    config: ScanConfig = DEFAULT_SCAN_CONFIG,
) -> list[Announcement]:
    """
    Find the announcements that pay a recipient.

    Each announcement is checked independently, so the batch can be split
    across worker processes with no coordination.

    Args:
        announcements: Announcements to scan, typically in publication order.
        view_priv: Recipient's private viewing key.
        spend_pub: Recipient's public spending key.
        config: Prefilter and parallelism settings.

    Returns:
        The owned announcements, in input order.
    """
    indexed = list(enumerate(announcements))
    chunks = [
        indexed[start : start + config.chunk_size]
        for start in range(0, len(indexed), config.chunk_size)
    ]
    worker = partial(_scan_chunk, view_priv, spend_pub, config.use_view_tags)

    if config.max_workers > 1 and len(chunks) > 1:
        with ProcessPoolExecutor(max_workers=config.max_workers) as executor:
            results = list(executor.map(worker, chunks))
    else:
        results = [worker(chunk) for chunk in chunks]

    owned = sorted(index for chunk_result in results for index in chunk_result)

    logger.debug(
        "Scanned %d announcements in %d chunks, %d owned",
        len(indexed),
        len(chunks),
        len(owned),
    )

    return [indexed[index][1] for index in owned]
