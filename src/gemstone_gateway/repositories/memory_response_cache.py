"""In-memory implementation of ResponseCache."""

import logging
import threading
import time
from collections.abc import Callable, Sequence

from gemstone_gateway.config import settings
from gemstone_gateway.entities import CacheEntryEntity, CandidateItem

logger = logging.getLogger(__name__)


class InMemoryResponseCache:
    """TTL map from cache key to a generated reply.

    This class satisfies the ResponseCache protocol through structural
    typing - no explicit inheritance needed.

    Expiry is lazy on read. When an insert pushes the size above
    ``max_entries``, every expired entry is swept; if the map is still
    above the bound the overflow is kept (expiry-based bound, not LRU).
    """

    def __init__(
        self,
        ttl: float | None = None,
        max_entries: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the response cache.

        Args:
            ttl: Entry time-to-live in seconds. Defaults to settings.
            max_entries: Size that triggers an expiry sweep. Defaults to settings.
            clock: Source of the current instant in seconds.
        """
        self._ttl = ttl or settings.response_cache_ttl_seconds
        self._max_entries = max_entries or settings.response_cache_max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(cls, ttl: float | None = None, max_entries: int | None = None) -> "InMemoryResponseCache":
        """Factory method to create InMemoryResponseCache with defaults."""
        return cls(ttl=ttl, max_entries=max_entries)

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, key: str) -> CacheEntryEntity | None:
        """Return the fresh entry for key, or None on miss or expiry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(self._clock(), self._ttl):
                del self._entries[key]
                return None
            return entry

    def put(
        self,
        key: str,
        response_text: str,
        candidates: Sequence[CandidateItem],
    ) -> CacheEntryEntity:
        """Store a generated reply and its candidates."""
        with self._lock:
            now = self._clock()
            entry = CacheEntryEntity(
                response_text=response_text,
                candidate_items=tuple(candidates),
                stored_at=now,
            )
            self._entries[key] = entry

            if len(self._entries) > self._max_entries:
                expired = [k for k, v in self._entries.items() if not v.is_fresh(now, self._ttl)]
                for k in expired:
                    del self._entries[k]
                logger.debug("Response cache sweep removed %d expired entries", len(expired))

            return entry

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear_all(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count
