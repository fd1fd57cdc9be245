"""
Announcements and the announcement channel contract.

An announcement is what a sender publishes after generating a stealth address:

    (stealth_address, ephemeral_pub, view_tag, metadata)

Recipients scan the published stream to find payments addressed to them.
Storage and transport of announcements belong to the channel, not to the core.
"""

from __future__ import annotations

from typing import Protocol

from pydantic import model_validator

from stealth_spec.types import Bytes1, Bytes20, StrictBaseModel

from ..secp256k1 import Point, require_public_key


class Announcement(StrictBaseModel):
    """A published stealth payment."""

    stealth_address: Bytes20
    """One-time receiving address."""

    ephemeral_pub: Point
    """Sender's ephemeral public key for this payment."""

    view_tag: Bytes1
    """One-byte scanning hint."""

    metadata: bytes = b""
    """Opaque application data carried alongside the announcement."""

    @model_validator(mode="after")
    def check_ephemeral_key(self) -> Announcement:
        """The ephemeral key must be usable as a public key."""
        require_public_key(self.ephemeral_pub, "ephemeral public key")
        return self


class AnnouncementChannel(Protocol):
    """
    Protocol for publishing and retrieving announcements.

    Implementations must make published announcements retrievable in
    publication order.
    """

    def publish(self, announcement: Announcement) -> None:
        """Publish one announcement."""
        ...

    def announcements(self) -> list[Announcement]:
        """Return every published announcement, oldest first."""
        ...


class InMemoryAnnouncementLog:
    """An append-only, in-process announcement channel."""

    def __init__(self) -> None:
        self._log: list[Announcement] = []

    def publish(self, announcement: Announcement) -> None:
        """Append an announcement to the log."""
        self._log.append(announcement)

    def announcements(self) -> list[Announcement]:
        """Return a snapshot of the log in publication order."""
        return list(self._log)

    def __len__(self) -> int:
        return len(self._log)
