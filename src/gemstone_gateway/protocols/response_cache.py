"""Response cache protocol.

Defines the interface for the short-TTL cache of generated replies.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from gemstone_gateway.entities import CacheEntryEntity, CandidateItem


@runtime_checkable
class ResponseCache(Protocol):
    """Protocol for response caches keyed on normalized query text."""

    @property
    def ttl(self) -> float:
        """Return the entry time-to-live in seconds."""
        ...

    def get(self, key: str) -> CacheEntryEntity | None:
        """Return the fresh entry for key, or None on miss or expiry.

        Args:
            key: Cache key (see ``make_cache_key``)

        Returns:
            CacheEntryEntity if present and fresh, None otherwise
        """
        ...

    def put(
        self,
        key: str,
        response_text: str,
        candidates: Sequence[CandidateItem],
    ) -> CacheEntryEntity:
        """Store a generated reply and its candidates.

        Args:
            key: Cache key
            response_text: The generated reply
            candidates: Candidate items shown with the reply

        Returns:
            The stored entry
        """
        ...

    def count_all(self) -> int:
        """Count entries currently held (fresh or not yet swept)."""
        ...

    def clear_all(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...
