"""
Stealth address CLI entry point.

Create keys, publish meta-addresses, generate stealth addresses, scan
announcements, and recover stealth private keys. All byte values are hex.

Usage::

    python -m stealth_spec keygen
    python -m stealth_spec meta-address --spend-pub 02... --view-pub 03...
    python -m stealth_spec generate --meta-address 02...03... --metadata cafe
    python -m stealth_spec scan --announcements log.json --view-priv ... --spend-pub 02...
    python -m stealth_spec recover --address ... --ephemeral-pub 02... \\
        --spend-priv ... --view-priv ...

Commands:
    keygen        Generate spend and view key pairs and their meta-address
    meta-address  Encode a meta-address from two public keys
    generate      Generate a stealth address and print its announcement
    scan          Print the announcements in a JSON file owned by a recipient
    recover       Recover the private key of an owned stealth address
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from stealth_spec.subspecs.secp256k1 import deserialize_point, serialize_compressed
from stealth_spec.subspecs.stealth import (
    Announcement,
    KeyPair,
    MetaAddress,
    ScanConfig,
    generate_stealth_address,
    recover_stealth_key,
    scalar_from_bytes,
    scalar_to_bytes,
    scan_announcements,
)
from stealth_spec.types import Bytes1, Bytes20, StealthError

logger = logging.getLogger(__name__)


def _from_hex(value: str) -> bytes:
    """Parse a hex string, with or without a '0x' prefix."""
    return bytes.fromhex(value.removeprefix("0x"))


def announcement_to_json(announcement: Announcement) -> dict[str, str]:
    """Render an announcement as a JSON object of hex strings."""
    return {
        "stealthAddress": announcement.stealth_address.hex(),
        "ephemeralPub": serialize_compressed(announcement.ephemeral_pub).hex(),
        "viewTag": announcement.view_tag.hex(),
        "metadata": announcement.metadata.hex(),
    }


def announcement_from_json(data: dict[str, str]) -> Announcement:
    """
    Parse an announcement rendered by `announcement_to_json`.

    Raises:
        InvalidPointError: If the ephemeral key is not a valid point.
        KeyError: If a required field is missing.
    """
    return Announcement(
        stealth_address=Bytes20(_from_hex(data["stealthAddress"])),
        ephemeral_pub=deserialize_point(_from_hex(data["ephemeralPub"])),
        view_tag=Bytes1(_from_hex(data["viewTag"])),
        metadata=_from_hex(data.get("metadata", "")),
    )


def cmd_keygen(args: argparse.Namespace) -> dict[str, Any]:
    """Generate a spend key pair, a view key pair, and their meta-address."""
    spend = KeyPair.generate()
    view = KeyPair.generate()
    meta = MetaAddress.from_key_pairs(spend, view)
    return {
        "spendPriv": scalar_to_bytes(spend.priv).hex(),
        "spendPub": serialize_compressed(spend.pub).hex(),
        "viewPriv": scalar_to_bytes(view.priv).hex(),
        "viewPub": serialize_compressed(view.pub).hex(),
        "metaAddress": meta.encode().hex(),
    }


def cmd_meta_address(args: argparse.Namespace) -> dict[str, Any]:
    """Encode a meta-address from a spend and a view public key."""
    meta = MetaAddress(
        spend_pub=deserialize_point(_from_hex(args.spend_pub)),
        view_pub=deserialize_point(_from_hex(args.view_pub)),
    )
    return {"metaAddress": meta.encode().hex()}


def cmd_generate(args: argparse.Namespace) -> dict[str, Any]:
    """Generate a stealth address for a meta-address."""
    meta = MetaAddress.decode(_from_hex(args.meta_address))
    generated = generate_stealth_address(meta)
    return announcement_to_json(generated.to_announcement(_from_hex(args.metadata)))


def cmd_scan(args: argparse.Namespace) -> dict[str, Any]:
    """Scan a JSON list of announcements for payments to a recipient."""
    raw = json.loads(Path(args.announcements).read_text())
    announcements = [announcement_from_json(item) for item in raw]

    config = ScanConfig(use_view_tags=not args.no_view_tags, max_workers=args.workers)
    owned = scan_announcements(
        announcements,
        scalar_from_bytes(_from_hex(args.view_priv)),
        deserialize_point(_from_hex(args.spend_pub)),
        config,
    )
    logger.info("%d of %d announcements owned", len(owned), len(announcements))
    return {"owned": [announcement_to_json(a) for a in owned]}


def cmd_recover(args: argparse.Namespace) -> dict[str, Any]:
    """Recover the stealth private key for an owned address."""
    key_pair = recover_stealth_key(
        Bytes20(_from_hex(args.address)),
        deserialize_point(_from_hex(args.ephemeral_pub)),
        scalar_from_bytes(_from_hex(args.spend_priv)),
        scalar_from_bytes(_from_hex(args.view_priv)),
    )
    return {
        "stealthPriv": scalar_to_bytes(key_pair.stealth_priv).hex(),
        "stealthPub": serialize_compressed(key_pair.stealth_pub).hex(),
        "address": key_pair.address.hex(),
    }


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)

        timestamp = self.formatTime(record, self.datefmt)
        colored_time = f"{self.CYAN}{timestamp}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"

        return f"{colored_time} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging to stderr with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    # stdout carries the JSON result.
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one sub-command per operation."""
    parser = argparse.ArgumentParser(
        prog="stealth-spec",
        description="secp256k1 stealth addresses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    keygen = commands.add_parser("keygen", help="Generate spend and view key pairs")
    keygen.set_defaults(handler=cmd_keygen)

    meta = commands.add_parser("meta-address", help="Encode a meta-address")
    meta.add_argument("--spend-pub", required=True, help="Spend public key (SEC1 hex)")
    meta.add_argument("--view-pub", required=True, help="View public key (SEC1 hex)")
    meta.set_defaults(handler=cmd_meta_address)

    generate = commands.add_parser("generate", help="Generate a stealth address")
    generate.add_argument("--meta-address", required=True, help="66-byte meta-address (hex)")
    generate.add_argument("--metadata", default="", help="Announcement metadata (hex)")
    generate.set_defaults(handler=cmd_generate)

    scan = commands.add_parser("scan", help="Scan announcements for owned payments")
    scan.add_argument(
        "--announcements",
        required=True,
        type=Path,
        help="JSON file with a list of announcements",
    )
    scan.add_argument("--view-priv", required=True, help="View private key (32-byte hex)")
    scan.add_argument("--spend-pub", required=True, help="Spend public key (SEC1 hex)")
    scan.add_argument(
        "--no-view-tags",
        action="store_true",
        help="Run the full check on every announcement",
    )
    scan.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes for scanning (default: 1)",
    )
    scan.set_defaults(handler=cmd_scan)

    recover = commands.add_parser("recover", help="Recover a stealth private key")
    recover.add_argument("--address", required=True, help="20-byte stealth address (hex)")
    recover.add_argument("--ephemeral-pub", required=True, help="Ephemeral public key (SEC1 hex)")
    recover.add_argument("--spend-priv", required=True, help="Spend private key (32-byte hex)")
    recover.add_argument("--view-priv", required=True, help="View private key (32-byte hex)")
    recover.set_defaults(handler=cmd_recover)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    try:
        result = args.handler(args)
    except (StealthError, ValueError) as e:
        logger.error("%s failed: %s", args.command, e)
        raise SystemExit(1) from e

    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
