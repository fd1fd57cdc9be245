"""
Fixed-width byte types.

Every wire value handled by the stealth address core has a fixed size:

- Bytes1:  view tag
- Bytes20: stealth address
- Bytes32: scalars and hash digests
- Bytes33: compressed curve point
- Bytes65: uncompressed curve point
- Bytes66: encoded meta-address
"""

from __future__ import annotations

from typing import Any, ClassVar, Iterable, SupportsIndex

from pydantic.annotated_handlers import GetCoreSchemaHandler
from pydantic_core import core_schema
from typing_extensions import Self


def _coerce_to_bytes(value: Any) -> bytes:
    """
    Coerce a variety of inputs to raw bytes.

    Accepts:
      - `bytes` / `bytearray` (returned as immutable `bytes`)
      - Iterables of integers in [0, 255]
      - Hex strings, with or without a '0x' prefix (e.g. "0xdeadbeef" or "deadbeef")

    Raises:
      ValueError / TypeError if conversion is not possible or out-of-range.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        # bytes.fromhex handles empty string and validates hex characters
        return bytes.fromhex(value.removeprefix("0x"))
    if isinstance(value, Iterable):
        # bytes(bytearray(iterable)) enforces each element is an int in 0..255
        return bytes(bytearray(value))
    # Fall back to Python's bytes() constructor (will raise if unsupported)
    return bytes(value)


class BaseBytes(bytes):
    """
    A base class for fixed-length byte types that inherits from `bytes`.

    Subclasses set:
      - `LENGTH`: exact number of bytes the instance must contain.

    Instances are immutable byte objects with strict length checking.
    """

    LENGTH: ClassVar[int]
    """The exact number of bytes (overridden by subclasses)."""

    def __new__(cls, value: Any = b"") -> Self:
        """
        Create and validate a new Bytes instance.

        Args:
            value: Any value coercible to bytes (see `_coerce_to_bytes`).

        Raises:
            ValueError: If the resulting byte length differs from `LENGTH`.
        """
        if not hasattr(cls, "LENGTH"):
            raise TypeError(f"{cls.__name__} must define LENGTH")

        b = _coerce_to_bytes(value)
        if len(b) != cls.LENGTH:
            raise ValueError(f"{cls.__name__} expects exactly {cls.LENGTH} bytes, got {len(b)}")
        return super().__new__(cls, b)

    @classmethod
    def zero(cls) -> Self:
        """Create a new instance filled with zero bytes."""
        return cls(b"\x00" * cls.LENGTH)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        """
        Hook into Pydantic's validation system.

        1. If the input is already an instance of the class, accept it.
        2. Otherwise, validate and coerce the input to the exact LENGTH
            and then instantiate the class.
        3. For serialization (e.g., to JSON), convert to hex string.
        """
        from_bytes_validator = core_schema.no_info_plain_validator_function(cls)

        python_schema = core_schema.chain_schema(
            [
                core_schema.bytes_schema(min_length=cls.LENGTH, max_length=cls.LENGTH),
                from_bytes_validator,
            ]
        )

        return core_schema.union_schema(
            [
                core_schema.is_instance_schema(cls),
                python_schema,
            ],
            serialization=core_schema.plain_serializer_function_ser_schema(lambda x: x.hex()),
        )

    def __repr__(self) -> str:
        """Return a string representation of the bytes."""
        tname = type(self).__name__
        return f"{tname}({self.hex()})"

    def __hash__(self) -> int:
        """Return the hash of the bytes."""
        return hash((type(self), bytes(self)))

    def hex(self, sep: str | bytes | None = None, bytes_per_sep: SupportsIndex = 1) -> str:
        """Return the hexadecimal string representation of the underlying bytes."""
        return bytes(self).hex() if sep is None else bytes(self).hex(sep, bytes_per_sep)


class Bytes1(BaseBytes):
    """Fixed-size byte array of exactly 1 byte."""

    LENGTH = 1


class Bytes20(BaseBytes):
    """Fixed-size byte array of exactly 20 bytes."""

    LENGTH = 20


class Bytes32(BaseBytes):
    """Fixed-size byte array of exactly 32 bytes."""

    LENGTH = 32


class Bytes33(BaseBytes):
    """Fixed-size byte array of exactly 33 bytes."""

    LENGTH = 33


class Bytes65(BaseBytes):
    """Fixed-size byte array of exactly 65 bytes."""

    LENGTH = 65


class Bytes66(BaseBytes):
    """Fixed-size byte array of exactly 66 bytes."""

    LENGTH = 66
