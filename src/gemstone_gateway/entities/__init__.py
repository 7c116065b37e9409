"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .cache_entry import CacheEntryEntity
from .catalog import CandidateItem, CatalogFilter, CatalogItem, PriceRange
from .chat_result import ChatResult, GatewayStatus
from .generation import GenerationOptions
from .parameters import ExtractedParameters
from .quota import RateLimitDecision, SessionDecision, SessionRecord

__all__ = [
    "CacheEntryEntity",
    "CandidateItem",
    "CatalogFilter",
    "CatalogItem",
    "ChatResult",
    "ExtractedParameters",
    "GatewayStatus",
    "GenerationOptions",
    "PriceRange",
    "RateLimitDecision",
    "SessionDecision",
    "SessionRecord",
]
