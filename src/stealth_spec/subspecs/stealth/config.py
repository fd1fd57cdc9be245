"""
Stealth Address Configuration

Protocol constants and runtime configuration for stealth address scanning.
"""

from typing import Final

from pydantic import Field

from stealth_spec.types import StrictBaseModel

META_ADDRESS_SIZE: Final = 66
"""Encoded meta-address: compressed spend key (33) || compressed view key (33)."""

STEALTH_ADDRESS_SIZE: Final = 20
"""Stealth address: last 20 bytes of keccak256(uncompressed stealth public key)."""

VIEW_TAG_SIZE: Final = 1
"""View tag: first byte of the shared-secret hash."""

SCALAR_SIZE: Final = 32
"""Bytes drawn from the entropy source for one ephemeral private key."""

DEFAULT_CHUNK_SIZE: Final = 256
"""Announcements handed to a scan worker at a time."""


class ScanConfig(StrictBaseModel):
    """Runtime configuration for batch scanning."""

    use_view_tags: bool = True
    """Reject announcements on a view tag mismatch before the full address check."""

    max_workers: int = Field(default=1, ge=1)
    """Worker processes for batch scanning. 1 scans in the calling process."""

    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1)
    """Announcements per worker task when scanning in parallel."""


DEFAULT_SCAN_CONFIG: Final = ScanConfig()
"""Single-process scanning with the view tag prefilter enabled."""
