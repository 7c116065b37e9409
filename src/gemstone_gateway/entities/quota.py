"""Rate limiter and session gate entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a sliding-window quota check.

    Attributes:
        allowed: Whether the request was admitted (and counted)
        remaining: Quota left in the current window after this decision
        retry_after: Seconds until the oldest counted request leaves the
            window (0 when allowed)
    """

    allowed: bool
    remaining: int
    retry_after: float = 0.0


@dataclass
class SessionRecord:
    """Per-identity anti-spam record. ``last_request_at`` never decreases."""

    last_request_at: float
    request_count: int = 1


@dataclass(frozen=True)
class SessionDecision:
    """Outcome of a session gate admission check."""

    admitted: bool
    request_count: int
    seconds_remaining: float = 0.0
