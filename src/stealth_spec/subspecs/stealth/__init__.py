"""
Stealth Address Protocol

One-time receiving addresses built on secp256k1 ECDH.

The module provides:
- Meta-address encoding and decoding
- Stealth address generation (sender)
- Ownership scanning with a one-byte view tag prefilter (recipient)
- Stealth private key recovery (recipient)
- Contracts for the announcement channel and the claim registry
"""

from .announcement import Announcement, AnnouncementChannel, InMemoryAnnouncementLog
from .config import (
    META_ADDRESS_SIZE,
    STEALTH_ADDRESS_SIZE,
    VIEW_TAG_SIZE,
    ScanConfig,
)
from .generator import GeneratedStealthAddress, generate_stealth_address
from .hashing import (
    SharedSecret,
    derive_address,
    derive_shared_secret,
    hash_shared_point,
    keccak256,
)
from .keys import (
    EntropySource,
    KeyPair,
    StealthKeyPair,
    draw_scalar,
    scalar_from_bytes,
    scalar_to_bytes,
)
from .meta_address import MetaAddress, decode_meta_address, encode_meta_address
from .recovery import recover_stealth_key
from .registry import ClaimRegistry, InMemoryClaimRegistry, claim_stealth_key
from .scanner import check_ownership, scan_announcements

__all__ = [
    # Constants
    "META_ADDRESS_SIZE",
    "STEALTH_ADDRESS_SIZE",
    "VIEW_TAG_SIZE",
    # Configuration
    "ScanConfig",
    # Keys
    "EntropySource",
    "KeyPair",
    "StealthKeyPair",
    "draw_scalar",
    "scalar_from_bytes",
    "scalar_to_bytes",
    # Hashing
    "SharedSecret",
    "keccak256",
    "hash_shared_point",
    "derive_shared_secret",
    "derive_address",
    # Meta-address
    "MetaAddress",
    "encode_meta_address",
    "decode_meta_address",
    # Protocol
    "GeneratedStealthAddress",
    "generate_stealth_address",
    "check_ownership",
    "scan_announcements",
    "recover_stealth_key",
    # Collaborators
    "Announcement",
    "AnnouncementChannel",
    "InMemoryAnnouncementLog",
    "ClaimRegistry",
    "InMemoryClaimRegistry",
    "claim_stealth_key",
]
