"""Tests for key pairs and entropy draws."""

from __future__ import annotations

import pytest

from stealth_spec.subspecs.secp256k1 import N, G, scalar_mul_base
from stealth_spec.subspecs.stealth import (
    KeyPair,
    draw_scalar,
    scalar_from_bytes,
    scalar_to_bytes,
)
from stealth_spec.types import EntropySourceFailureError, InvalidScalarError
from tests.stealth_spec.helpers import fixed_entropy


class TestDrawScalar:
    """Tests for drawing ephemeral scalars from caller entropy."""

    def test_fixed_entropy_is_deterministic(self):
        """The same bytes always give the same scalar."""
        assert draw_scalar(fixed_entropy(42)) == 42

    def test_draws_exactly_once(self):
        """A single 32-byte request is made per draw."""
        requests: list[int] = []

        def source(num_bytes: int) -> bytes:
            requests.append(num_bytes)
            return bytes(31) + b"\x05"

        assert draw_scalar(source) == 5
        assert requests == [32]

    def test_zero_draw_fails(self):
        """An all-zero draw is not a scalar and is not retried."""
        with pytest.raises(EntropySourceFailureError, match=r"\[1, n-1\]"):
            draw_scalar(lambda n: bytes(n))

    def test_draw_at_group_order_fails(self):
        """A draw equal to n is out of range."""
        with pytest.raises(EntropySourceFailureError):
            draw_scalar(fixed_entropy(N))

    def test_short_draw_fails(self):
        """The source must return exactly the requested number of bytes."""
        with pytest.raises(EntropySourceFailureError, match="expected 32 bytes, got 16"):
            draw_scalar(lambda n: b"\x01" * 16)

    def test_non_bytes_draw_fails(self):
        """The source must return bytes."""
        with pytest.raises(EntropySourceFailureError, match="expected bytes"):
            draw_scalar(lambda n: "a" * n)  # type: ignore[arg-type, return-value]

    def test_source_exception_is_wrapped(self):
        """An exhausted source surfaces as an entropy failure with the cause attached."""

        def exhausted(num_bytes: int) -> bytes:
            raise OSError("no randomness left")

        with pytest.raises(EntropySourceFailureError, match="OSError") as exc_info:
            draw_scalar(exhausted)
        assert isinstance(exc_info.value.__cause__, OSError)


class TestKeyPair:
    """Tests for the KeyPair model."""

    def test_from_private(self):
        """The public key is priv * G."""
        kp = KeyPair.from_private(1)
        assert kp.pub == G

    def test_generate_with_fixed_entropy(self):
        """Generation uses the entropy source for the private key."""
        kp = KeyPair.generate(fixed_entropy(3))
        assert kp.priv == 3
        assert kp.pub == scalar_mul_base(3)

    def test_generate_default_source(self):
        """The default source produces distinct keys."""
        assert KeyPair.generate().priv != KeyPair.generate().priv

    def test_mismatched_public_key_rejected(self):
        """A public key that does not match the private key is refused."""
        with pytest.raises(ValueError, match="does not match"):
            KeyPair(priv=2, pub=G)

    @pytest.mark.parametrize("priv", [0, N])
    def test_out_of_range_private_key_rejected(self, priv: int):
        """Zero and n are not private keys."""
        with pytest.raises(InvalidScalarError):
            KeyPair.from_private(priv)

    def test_private_key_hidden_from_repr(self):
        """The private scalar never shows up in the representation."""
        kp = KeyPair.from_private(0xC0FFEE)
        assert "priv" not in repr(kp)
        assert str(0xC0FFEE) not in repr(kp)


class TestScalarBytes:
    """Tests for 32-byte scalar encoding."""

    def test_roundtrip(self):
        """Encoding is 32 bytes big-endian and reversible."""
        encoded = scalar_to_bytes(0x0102)
        assert encoded == bytes(30) + b"\x01\x02"
        assert scalar_from_bytes(encoded) == 0x0102

    def test_zero_rejected(self):
        """The zero scalar does not decode."""
        with pytest.raises(InvalidScalarError):
            scalar_from_bytes(bytes(32))

    def test_wrong_length_rejected(self):
        """Scalars are exactly 32 bytes."""
        with pytest.raises(ValueError, match="exactly 32 bytes"):
            scalar_from_bytes(b"\x01")
