"""
Moodboard storage for the Moodboard service.

This module defines the storage interface the HTTP handlers depend on and an
in-memory implementation of it. The interface allows for easy replacement
with a persistent backend (a database table with a unique share id index)
without touching the handlers.
"""

import asyncio
import secrets
import string
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from .models import Moodboard

SHARE_ID_ALPHABET = string.ascii_letters + string.digits + "_-"
SHARE_ID_LENGTH = 10


def generate_share_id(size: int = SHARE_ID_LENGTH) -> str:
    """Return a random URL-safe token of ``size`` characters."""
    return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(size))


class MoodboardStore(ABC):
    """Capabilities the request handlers need from a moodboard backend."""

    @abstractmethod
    async def create(
        self,
        *,
        mood: str,
        quote: str,
        images: list[str],
        colors: list[str],
        playlist_id: str | None,
        share_id: str,
    ) -> Moodboard:
        """Persist a new moodboard and return the stored record."""

    @abstractmethod
    async def get_by_id(self, moodboard_id: int) -> Moodboard | None:
        """Return the moodboard with the given id, if any."""

    @abstractmethod
    async def get_by_share_id(self, share_id: str) -> Moodboard | None:
        """Return the moodboard with the given share id, if any."""


class InMemoryMoodboardStore(MoodboardStore):
    """
    Process-local moodboard storage.

    Records are kept in a primary map keyed by id and a secondary index from
    share id to id. Records are never updated or evicted. Id assignment and
    both index writes happen under one lock, so readers never see a share id
    whose record is missing.
    """

    def __init__(self) -> None:
        self._moodboards: dict[int, Moodboard] = {}
        self._share_index: dict[str, int] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._moodboards)

    async def create(
        self,
        *,
        mood: str,
        quote: str,
        images: list[str],
        colors: list[str],
        playlist_id: str | None,
        share_id: str,
    ) -> Moodboard:
        """
        Store a new moodboard under the next sequential id.

        Args:
            mood: The mood label the board was generated for
            quote: Quote text
            images: Image URLs
            colors: Hex palette
            playlist_id: Optional playlist reference
            share_id: Public lookup token

        Returns:
            The stored Moodboard, stamped with id and creation time
        """
        async with self._lock:
            moodboard = Moodboard(
                id=self._next_id,
                mood=mood,
                quote=quote,
                images=tuple(images),
                colors=tuple(colors),
                playlist_id=playlist_id or None,
                share_id=share_id,
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1

            self._moodboards[moodboard.id] = moodboard
            self._share_index[moodboard.share_id] = moodboard.id

            return moodboard

    async def get_by_id(self, moodboard_id: int) -> Moodboard | None:
        """Return the moodboard stored under ``moodboard_id``, if any."""
        return self._moodboards.get(moodboard_id)

    async def get_by_share_id(self, share_id: str) -> Moodboard | None:
        """
        Resolve a share id through the secondary index.

        Returns:
            The Moodboard, or None when either lookup misses
        """
        async with self._lock:
            moodboard_id = self._share_index.get(share_id)
            if moodboard_id is None:
                return None
            return self._moodboards.get(moodboard_id)
