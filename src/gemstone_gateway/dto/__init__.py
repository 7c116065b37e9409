"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.
Field names are snake_case in Python and camelCase on the wire.

Internal domain logic should use entities from the entities package.
"""

from .requests import ChatRequest
from .responses import (
    CandidateItemResponse,
    ChatResponse,
    HealthCheckResponse,
    PriceRangeItem,
    RateLimitStatus,
    ResetLimitResponse,
    StatusResponse,
)

__all__ = [
    "ChatRequest",
    "CandidateItemResponse",
    "ChatResponse",
    "HealthCheckResponse",
    "PriceRangeItem",
    "RateLimitStatus",
    "ResetLimitResponse",
    "StatusResponse",
]
