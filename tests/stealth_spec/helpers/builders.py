"""
Factory functions for constructing test fixtures.

All builders are deterministic: keys come from small seeds and ephemeral
draws from fixed entropy, so failures are reproducible.
"""

from __future__ import annotations

from typing import NamedTuple

from stealth_spec.subspecs.stealth import (
    Announcement,
    EntropySource,
    KeyPair,
    MetaAddress,
    generate_stealth_address,
)
from stealth_spec.subspecs.stealth.keys import SCALAR_SIZE


def fixed_entropy(k: int) -> EntropySource:
    """An entropy source that always returns the big-endian encoding of `k`."""

    def source(num_bytes: int) -> bytes:
        assert num_bytes == SCALAR_SIZE
        return k.to_bytes(num_bytes, "big")

    return source


def make_key_pair(seed: int) -> KeyPair:
    """Create a key pair with a deterministic private key derived from a seed."""
    return KeyPair.from_private(0x1000 + seed * 0x9E3779B97F4A7C15)


class Recipient(NamedTuple):
    """A recipient's long-lived keys and published meta-address."""

    spend: KeyPair
    view: KeyPair
    meta: MetaAddress


def make_recipient(seed: int = 0) -> Recipient:
    """Create a recipient with deterministic spend and view keys."""
    spend = make_key_pair(2 * seed + 1)
    view = make_key_pair(2 * seed + 2)
    return Recipient(spend=spend, view=view, meta=MetaAddress.from_key_pairs(spend, view))


def make_announcements(meta: MetaAddress, count: int, first_ephemeral: int = 7) -> list[Announcement]:
    """Generate `count` announcements paying `meta`, with consecutive ephemeral keys."""
    return [
        generate_stealth_address(meta, fixed_entropy(first_ephemeral + i)).to_announcement(
            metadata=bytes([i])
        )
        for i in range(count)
    ]
