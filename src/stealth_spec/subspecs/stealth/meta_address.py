"""
Meta-address codec.

A meta-address is the long-lived, publishable identity of a recipient. It is
the pair (spend_pub, view_pub):

- spend_pub gates control of funds.
- view_pub gates the ability to scan. The matching view private key can be
  handed to a scanning delegate without giving away spend rights.

Wire format (66 bytes, no delimiter, no scheme prefix):

    compressed(spend_pub) (33) || compressed(view_pub) (33)
"""

from __future__ import annotations

from pydantic import model_validator

from stealth_spec.types import Bytes66, InvalidMetaAddressLengthError, StrictBaseModel

from ..secp256k1 import (
    COMPRESSED_POINT_SIZE,
    Point,
    deserialize_compressed,
    require_public_key,
    serialize_compressed,
)
from .config import META_ADDRESS_SIZE
from .keys import KeyPair


class MetaAddress(StrictBaseModel):
    """A recipient's spend and view public keys."""

    spend_pub: Point
    """Public spending key."""

    view_pub: Point
    """Public viewing key."""

    @model_validator(mode="after")
    def check_public_keys(self) -> MetaAddress:
        """Both halves must be finite points on the curve."""
        require_public_key(self.spend_pub, "spend public key")
        require_public_key(self.view_pub, "view public key")
        return self

    @classmethod
    def from_key_pairs(cls, spend: KeyPair, view: KeyPair) -> MetaAddress:
        """Build the meta-address published for a spend and a view key pair."""
        return cls(spend_pub=spend.pub, view_pub=view.pub)

    def encode(self) -> Bytes66:
        """Encode as 66 bytes."""
        return encode_meta_address(self)

    @classmethod
    def decode(cls, data: bytes) -> MetaAddress:
        """Decode from 66 bytes."""
        return decode_meta_address(data)


def encode_meta_address(meta: MetaAddress) -> Bytes66:
    """Encode a meta-address as compressed spend key || compressed view key."""
    return Bytes66(serialize_compressed(meta.spend_pub) + serialize_compressed(meta.view_pub))


def decode_meta_address(data: bytes) -> MetaAddress:
    """
    Decode a 66-byte meta-address.

    Raises:
        InvalidMetaAddressLengthError: If data is not exactly 66 bytes.
        InvalidPointError: If either half is not a valid compressed point.
    """
    if len(data) != META_ADDRESS_SIZE:
        raise InvalidMetaAddressLengthError(expected=META_ADDRESS_SIZE, actual=len(data))

    spend_pub = deserialize_compressed(data[:COMPRESSED_POINT_SIZE])
    view_pub = deserialize_compressed(data[COMPRESSED_POINT_SIZE:])
    return MetaAddress(spend_pub=spend_pub, view_pub=view_pub)
