"""In-memory implementation of QuotaStore.

Sliding-window limiter: every admitted request records its instant, and a
request is admitted only while fewer than ``max_requests`` instants fall
inside the trailing window.
"""

import threading
import time
from collections import deque
from collections.abc import Callable

from gemstone_gateway.config import settings
from gemstone_gateway.entities import RateLimitDecision


class InMemoryQuotaStore:
    """Per-identity sliding-window counter held in process memory.

    This class satisfies the QuotaStore protocol through structural
    typing - no explicit inheritance needed.

    State is disposable: it lives for the process lifetime only. Windows of
    identities with no request inside the window are evicted lazily on
    every check.
    """

    def __init__(
        self,
        max_requests: int | None = None,
        window_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the quota store.

        Args:
            max_requests: Requests allowed per window. Defaults to settings.
            window_seconds: Window duration. Defaults to settings.
            clock: Source of the current instant in seconds.
        """
        self._max_requests = max_requests or settings.rate_limit_max_requests
        self._window = window_seconds or settings.rate_limit_window_seconds
        self._clock = clock
        self._windows: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        max_requests: int | None = None,
        window_seconds: float | None = None,
    ) -> "InMemoryQuotaStore":
        """Factory method to create InMemoryQuotaStore with defaults.

        Args:
            max_requests: Requests per window. If None, uses settings.
            window_seconds: Window duration. If None, uses settings.

        Returns:
            Configured InMemoryQuotaStore
        """
        return cls(max_requests=max_requests, window_seconds=window_seconds)

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_seconds(self) -> float:
        return self._window

    def _prune(self, timestamps: deque[float], now: float) -> None:
        cutoff = now - self._window
        while timestamps and timestamps[0] < cutoff:
            timestamps.popleft()

    def _sweep(self, now: float) -> None:
        """Drop windows whose newest request has left the window."""
        cutoff = now - self._window
        stale = [key for key, stamps in self._windows.items() if not stamps or stamps[-1] < cutoff]
        for key in stale:
            del self._windows[key]

    def check_and_consume(self, identity: str) -> RateLimitDecision:
        """Admit and count a request if the identity is under quota.

        Args:
            identity: The caller-distinguishing key

        Returns:
            RateLimitDecision; a rejected request is not recorded
        """
        with self._lock:
            now = self._clock()
            self._sweep(now)

            timestamps = self._windows.setdefault(identity, deque())
            self._prune(timestamps, now)

            if len(timestamps) >= self._max_requests:
                retry_after = max(0.0, timestamps[0] + self._window - now)
                return RateLimitDecision(allowed=False, remaining=0, retry_after=retry_after)

            timestamps.append(now)
            return RateLimitDecision(
                allowed=True,
                remaining=self._max_requests - len(timestamps),
            )

    def consumed(self, identity: str) -> int:
        """Count requests recorded for the identity inside the window."""
        with self._lock:
            timestamps = self._windows.get(identity)
            if not timestamps:
                return 0
            cutoff = self._clock() - self._window
            return sum(1 for stamp in timestamps if stamp >= cutoff)

    def reset(self, identity: str) -> None:
        """Forget all recorded requests for the identity."""
        with self._lock:
            self._windows.pop(identity, None)

    def count_identities(self) -> int:
        """Count identities currently tracked."""
        with self._lock:
            return len(self._windows)
