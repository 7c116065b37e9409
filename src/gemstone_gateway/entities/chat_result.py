"""Chat operation result entities."""

from dataclasses import dataclass, field

from .catalog import CandidateItem


@dataclass(frozen=True)
class ChatResult:
    """Result of one chat call.

    Attributes:
        response_text: One-line reply for the user
        candidates: Catalog items suggested with the reply
        served_from_cache: Whether the reply came from the response cache
        rate_limit_remaining: Quota left for the caller after this call
    """

    response_text: str
    candidates: tuple[CandidateItem, ...] = ()
    served_from_cache: bool = False
    rate_limit_remaining: int = 0


@dataclass(frozen=True)
class GatewayStatus:
    """Read-only snapshot of quota configuration and caller usage."""

    service_available: bool
    window_seconds: float
    max_requests: int
    consumed: int
    remaining: int
    session_request_count: int
    restrictions: dict = field(default_factory=dict)
