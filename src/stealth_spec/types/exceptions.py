"""Exception hierarchy for the stealth address core."""

from __future__ import annotations

from typing import Any


class StealthError(Exception):
    """
    Base exception for all stealth-address errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class InvalidScalarError(StealthError):
    """
    Raised when a scalar is zero, out of range, or not an integer.

    Covers both scalars supplied by the caller (private keys) and scalars
    produced internally (a shared-secret hash or stealth key that reduces to 0).

    Attributes:
        value: The rejected value (may be truncated for display).
    """

    def __init__(self, value: Any, detail: str | None = None) -> None:
        self.value = value

        value_repr = repr(value)
        if len(value_repr) > 50:
            value_repr = value_repr[:47] + "..."

        msg = f"Invalid scalar {value_repr}"
        if detail:
            msg = f"{msg}: {detail}"

        super().__init__(msg)


class InvalidPointError(StealthError):
    """
    Raised when a point is malformed, off the curve, or at infinity where a public key is required.

    Attributes:
        detail: Description of what went wrong.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Invalid point: {detail}")


class InvalidMetaAddressLengthError(StealthError):
    """
    Raised when an encoded meta-address is not exactly the expected length.

    Attributes:
        expected: The required length in bytes.
        actual: The length received.
    """

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Meta-address requires exactly {expected} bytes, got {actual}")


class AddressMismatchError(StealthError):
    """
    Raised when a recovered stealth key does not derive the expected address.

    The recovered key is discarded; it is never attached to the exception.

    Attributes:
        expected: The address the caller asked to recover.
        derived: The address the recovered key actually controls.
    """

    def __init__(self, *, expected: bytes, derived: bytes) -> None:
        self.expected = expected
        self.derived = derived
        super().__init__(
            f"Recovered key derives address 0x{derived.hex()}, expected 0x{expected.hex()}"
        )


class EntropySourceFailureError(StealthError):
    """
    Raised when the caller-supplied entropy source cannot produce a valid scalar.

    Attributes:
        detail: Description of the failure.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Entropy source failure: {detail}")


class AlreadyClaimedError(StealthError):
    """
    Raised by the claim path when a stealth address has already been claimed.

    Attributes:
        address: The stealth address that was claimed before.
    """

    def __init__(self, address: bytes) -> None:
        self.address = address
        super().__init__(f"Stealth address 0x{address.hex()} has already been claimed")
