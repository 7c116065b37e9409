"""Quota store protocol.

Defines the interface for the per-identity sliding-window request limiter.
"""

from typing import Protocol, runtime_checkable

from gemstone_gateway.entities import RateLimitDecision


@runtime_checkable
class QuotaStore(Protocol):
    """Protocol for sliding-window quota stores.

    Implementations must make ``check_and_consume`` a single critical
    section so concurrent callers can never exceed the quota.
    """

    @property
    def max_requests(self) -> int:
        """Return the number of requests allowed per window."""
        ...

    @property
    def window_seconds(self) -> float:
        """Return the window duration in seconds."""
        ...

    def check_and_consume(self, identity: str) -> RateLimitDecision:
        """Admit and count a request if the identity is under quota.

        Args:
            identity: The caller-distinguishing key

        Returns:
            RateLimitDecision; a rejected request is not counted
        """
        ...

    def consumed(self, identity: str) -> int:
        """Count requests recorded for the identity inside the window.

        Args:
            identity: The caller-distinguishing key

        Returns:
            Number of counted requests (no state changes)
        """
        ...

    def reset(self, identity: str) -> None:
        """Forget all recorded requests for the identity."""
        ...
