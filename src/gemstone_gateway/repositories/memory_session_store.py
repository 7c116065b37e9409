"""In-memory implementation of SessionStore."""

import threading
import time
from collections.abc import Callable
from dataclasses import replace

from gemstone_gateway.config import settings
from gemstone_gateway.entities import SessionDecision, SessionRecord


class InMemorySessionStore:
    """Minimum-interval gate with per-identity request counts.

    This class satisfies the SessionStore protocol through structural
    typing - no explicit inheritance needed.

    Records idle for longer than ``idle_ttl`` are removed on every
    ``admit`` call, before the current request is evaluated.
    """

    def __init__(
        self,
        min_interval: float | None = None,
        idle_ttl: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the session store.

        Args:
            min_interval: Minimum seconds between admitted requests. Defaults to settings.
            idle_ttl: Seconds of inactivity before a record is evicted. Defaults to settings.
            clock: Source of the current instant in seconds.
        """
        self._min_interval = (
            settings.session_min_interval_seconds if min_interval is None else min_interval
        )
        self._idle_ttl = idle_ttl or settings.session_idle_ttl_seconds
        self._clock = clock
        self._records: dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        min_interval: float | None = None,
        idle_ttl: float | None = None,
    ) -> "InMemorySessionStore":
        """Factory method to create InMemorySessionStore with defaults."""
        return cls(min_interval=min_interval, idle_ttl=idle_ttl)

    @property
    def min_interval(self) -> float:
        return self._min_interval

    def _sweep(self, now: float) -> None:
        stale = [
            key for key, record in self._records.items()
            if now - record.last_request_at > self._idle_ttl
        ]
        for key in stale:
            del self._records[key]

    def admit(self, identity: str) -> SessionDecision:
        """Admit a request if the minimum interval has elapsed.

        Args:
            identity: The caller-distinguishing key

        Returns:
            SessionDecision; a throttled request does not touch the record
        """
        with self._lock:
            now = self._clock()
            self._sweep(now)

            record = self._records.get(identity)
            if record is None:
                self._records[identity] = SessionRecord(last_request_at=now, request_count=1)
                return SessionDecision(admitted=True, request_count=1)

            elapsed = now - record.last_request_at
            if elapsed < self._min_interval:
                return SessionDecision(
                    admitted=False,
                    request_count=record.request_count,
                    seconds_remaining=self._min_interval - elapsed,
                )

            record.last_request_at = max(record.last_request_at, now)
            record.request_count += 1
            return SessionDecision(admitted=True, request_count=record.request_count)

    def get(self, identity: str) -> SessionRecord | None:
        """Return a copy of the identity's record, if any."""
        with self._lock:
            record = self._records.get(identity)
            return replace(record) if record else None

    def reset(self, identity: str) -> None:
        """Remove the identity's record."""
        with self._lock:
            self._records.pop(identity, None)

    def count_all(self) -> int:
        """Count tracked sessions."""
        with self._lock:
            return len(self._records)
