"""Tests for the CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stealth_spec.__main__ import (
    announcement_from_json,
    announcement_to_json,
    build_parser,
    main,
)
from stealth_spec.subspecs.secp256k1 import serialize_compressed
from tests.stealth_spec.helpers import make_announcements, make_recipient


def run_cli(capsys: pytest.CaptureFixture[str], *argv: str) -> dict:
    """Run the CLI and parse its JSON output."""
    main(["--no-color", *argv])
    return json.loads(capsys.readouterr().out)


class TestAnnouncementJson:
    """Tests for announcement rendering."""

    def test_roundtrip(self):
        """Rendering to hex and parsing back restores the announcement."""
        announcement = make_announcements(make_recipient().meta, 1)[0]
        assert announcement_from_json(announcement_to_json(announcement)) == announcement

    def test_ephemeral_key_is_compressed(self):
        """The ephemeral key is rendered as a 33-byte compressed point."""
        announcement = make_announcements(make_recipient().meta, 1)[0]
        rendered = announcement_to_json(announcement)
        assert rendered["ephemeralPub"] == serialize_compressed(announcement.ephemeral_pub).hex()


class TestCommands:
    """Tests for the sub-commands."""

    def test_full_flow(self, capsys: pytest.CaptureFixture[str], tmp_path: Path):
        """keygen, generate, scan and recover agree with each other."""
        keys = run_cli(capsys, "keygen")
        assert len(bytes.fromhex(keys["metaAddress"])) == 66

        announcement = run_cli(
            capsys, "generate", "--meta-address", keys["metaAddress"], "--metadata", "cafe"
        )
        assert announcement["metadata"] == "cafe"

        log_file = tmp_path / "announcements.json"
        log_file.write_text(json.dumps([announcement]))

        scanned = run_cli(
            capsys,
            "scan",
            "--announcements",
            str(log_file),
            "--view-priv",
            keys["viewPriv"],
            "--spend-pub",
            keys["spendPub"],
        )
        assert scanned["owned"] == [announcement]

        recovered = run_cli(
            capsys,
            "recover",
            "--address",
            announcement["stealthAddress"],
            "--ephemeral-pub",
            announcement["ephemeralPub"],
            "--spend-priv",
            keys["spendPriv"],
            "--view-priv",
            keys["viewPriv"],
        )
        assert recovered["address"] == announcement["stealthAddress"]

    def test_meta_address(self, capsys: pytest.CaptureFixture[str]):
        """meta-address encodes the two public keys."""
        recipient = make_recipient()
        result = run_cli(
            capsys,
            "meta-address",
            "--spend-pub",
            serialize_compressed(recipient.spend.pub).hex(),
            "--view-pub",
            serialize_compressed(recipient.view.pub).hex(),
        )
        assert result["metaAddress"] == recipient.meta.encode().hex()

    def test_bad_meta_address_exits_nonzero(self, capsys: pytest.CaptureFixture[str]):
        """A malformed meta-address is reported and exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--no-color", "generate", "--meta-address", "00" * 65])
        assert exc_info.value.code == 1
        assert capsys.readouterr().out == ""

    def test_recover_wrong_keys_exits_nonzero(self):
        """Recovering with the wrong keys fails instead of printing a key."""
        announcement = make_announcements(make_recipient(1).meta, 1)[0]
        other = make_recipient(2)

        with pytest.raises(SystemExit) as exc_info:
            main(
                [
                    "--no-color",
                    "recover",
                    "--address",
                    announcement.stealth_address.hex(),
                    "--ephemeral-pub",
                    serialize_compressed(announcement.ephemeral_pub).hex(),
                    "--spend-priv",
                    other.spend.priv.to_bytes(32, "big").hex(),
                    "--view-priv",
                    other.view.priv.to_bytes(32, "big").hex(),
                ]
            )
        assert exc_info.value.code == 1

    def test_command_required(self):
        """Running without a sub-command is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args([])
        assert exc_info.value.code == 2
