"""Test helpers for stealth_spec unit tests."""

from __future__ import annotations

from .builders import (
    Recipient,
    fixed_entropy,
    make_announcements,
    make_key_pair,
    make_recipient,
)

__all__ = [
    "Recipient",
    "fixed_entropy",
    "make_announcements",
    "make_key_pair",
    "make_recipient",
]
