"""Reusable type definitions for the stealth address library."""

from .base import CamelModel, StrictBaseModel
from .byte_arrays import Bytes1, Bytes20, Bytes32, Bytes33, Bytes65, Bytes66
from .exceptions import (
    AddressMismatchError,
    AlreadyClaimedError,
    EntropySourceFailureError,
    InvalidMetaAddressLengthError,
    InvalidPointError,
    InvalidScalarError,
    StealthError,
)

__all__ = [
    # Core types
    "Bytes1",
    "Bytes20",
    "Bytes32",
    "Bytes33",
    "Bytes65",
    "Bytes66",
    "CamelModel",
    "StrictBaseModel",
    # Exceptions
    "StealthError",
    "InvalidScalarError",
    "InvalidPointError",
    "InvalidMetaAddressLengthError",
    "AddressMismatchError",
    "EntropySourceFailureError",
    "AlreadyClaimedError",
]
