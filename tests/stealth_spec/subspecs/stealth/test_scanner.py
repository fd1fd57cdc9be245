"""Tests for stealth address scanning."""

from __future__ import annotations

import pytest

from stealth_spec.subspecs.secp256k1 import INFINITY, N, G, scalar_mul_base
from stealth_spec.subspecs.stealth import (
    Announcement,
    ScanConfig,
    check_ownership,
    generate_stealth_address,
    scan_announcements,
)
from stealth_spec.subspecs.stealth import scanner as scanner_module
from stealth_spec.types import Bytes1, Bytes20, InvalidPointError, InvalidScalarError
from tests.stealth_spec.helpers import fixed_entropy, make_announcements, make_recipient


def flip_tag(tag: Bytes1) -> Bytes1:
    """Return a different view tag."""
    return Bytes1(bytes([tag[0] ^ 0xFF]))


class TestCheckOwnership:
    """Tests for check_ownership."""

    def test_owner_recognizes_payment(self):
        """The recipient's own keys match a generated address."""
        recipient = make_recipient()
        generated = generate_stealth_address(recipient.meta, fixed_entropy(77))

        assert check_ownership(
            generated.address,
            generated.ephemeral_pub,
            recipient.view.priv,
            recipient.spend.pub,
        )

    def test_owner_recognizes_payment_with_tag(self):
        """The fast path never rejects a payment whose tag matches."""
        recipient = make_recipient()
        generated = generate_stealth_address(recipient.meta, fixed_entropy(77))

        assert check_ownership(
            generated.address,
            generated.ephemeral_pub,
            recipient.view.priv,
            recipient.spend.pub,
            generated.view_tag,
        )

    def test_unrelated_keys_rejected(self):
        """A different recipient's keys do not match."""
        generated = generate_stealth_address(make_recipient(1).meta, fixed_entropy(77))
        other = make_recipient(2)

        assert not check_ownership(
            generated.address,
            generated.ephemeral_pub,
            other.view.priv,
            other.spend.pub,
        )

    def test_other_spend_key_rejected(self):
        """The view key alone is not enough: the spend key must match too."""
        recipient = make_recipient()
        generated = generate_stealth_address(recipient.meta, fixed_entropy(77))

        assert not check_ownership(
            generated.address,
            generated.ephemeral_pub,
            recipient.view.priv,
            make_recipient(9).spend.pub,
            generated.view_tag,
        )

    def test_tag_mismatch_rejects_early(self, monkeypatch: pytest.MonkeyPatch):
        """A wrong tag returns False before the base multiplication."""
        recipient = make_recipient()
        generated = generate_stealth_address(recipient.meta, fixed_entropy(77))

        calls: list[int] = []

        def counting_scalar_mul_base(k: int):
            calls.append(k)
            return scalar_mul_base(k)

        monkeypatch.setattr(scanner_module, "scalar_mul_base", counting_scalar_mul_base)

        assert not check_ownership(
            generated.address,
            generated.ephemeral_pub,
            recipient.view.priv,
            recipient.spend.pub,
            flip_tag(generated.view_tag),
        )
        assert calls == []

    def test_tag_match_is_not_proof_of_ownership(self):
        """A matching tag still requires the full address check."""
        recipient = make_recipient()
        generated = generate_stealth_address(recipient.meta, fixed_entropy(77))

        assert not check_ownership(
            Bytes20(bytes(20)),
            generated.ephemeral_pub,
            recipient.view.priv,
            recipient.spend.pub,
            generated.view_tag,
        )

    @pytest.mark.parametrize("view_priv", [0, N])
    def test_invalid_view_key_rejected(self, view_priv: int):
        """The view key must be a valid scalar."""
        generated = generate_stealth_address(make_recipient().meta, fixed_entropy(77))
        with pytest.raises(InvalidScalarError):
            check_ownership(generated.address, generated.ephemeral_pub, view_priv, G)

    def test_infinity_spend_key_rejected(self):
        """The spend key must be a real public key."""
        generated = generate_stealth_address(make_recipient().meta, fixed_entropy(77))
        with pytest.raises(InvalidPointError, match="spend public key"):
            check_ownership(generated.address, generated.ephemeral_pub, 5, INFINITY)


class TestScanAnnouncements:
    """Tests for batch scanning."""

    @staticmethod
    def mixed_log() -> tuple[list[Announcement], list[Announcement]]:
        """Interleave payments to recipient 0 with payments to recipient 1."""
        mine = make_announcements(make_recipient(0).meta, 3, first_ephemeral=100)
        theirs = make_announcements(make_recipient(1).meta, 4, first_ephemeral=200)
        log = [theirs[0], mine[0], theirs[1], theirs[2], mine[1], theirs[3], mine[2]]
        return log, mine

    def test_finds_owned_in_order(self):
        """Only the recipient's announcements come back, in publication order."""
        log, mine = self.mixed_log()
        recipient = make_recipient(0)

        assert scan_announcements(log, recipient.view.priv, recipient.spend.pub) == mine

    def test_same_result_without_view_tags(self):
        """Disabling the prefilter never changes the result."""
        log, mine = self.mixed_log()
        recipient = make_recipient(0)
        config = ScanConfig(use_view_tags=False, chunk_size=2)

        assert scan_announcements(log, recipient.view.priv, recipient.spend.pub, config) == mine

    def test_empty_batch(self):
        """Scanning nothing finds nothing."""
        recipient = make_recipient(0)
        assert scan_announcements([], recipient.view.priv, recipient.spend.pub) == []

    def test_parallel_matches_sequential(self):
        """Worker processes find the same announcements as a single process."""
        log, mine = self.mixed_log()
        recipient = make_recipient(0)
        config = ScanConfig(max_workers=2, chunk_size=2)

        assert scan_announcements(log, recipient.view.priv, recipient.spend.pub, config) == mine

    def test_config_bounds(self):
        """Workers and chunk size must be positive."""
        with pytest.raises(ValueError):
            ScanConfig(max_workers=0)
        with pytest.raises(ValueError):
            ScanConfig(chunk_size=0)
