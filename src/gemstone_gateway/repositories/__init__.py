"""Repository layer for state and external collaborators.

This layer hides in-process state (quota windows, session records,
cached replies) and external dependencies (catalog store, Gemini API)
behind protocol-based interfaces. This enables:
- Deterministic clocks and isolated state in tests
- Easy swapping of implementations (in-memory catalog → Redis, etc.)
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from .gemini_text_generator import GeminiTextGenerator
from .memory_catalog_repository import InMemoryCatalogRepository, load_seed_items
from .memory_quota_store import InMemoryQuotaStore
from .memory_response_cache import InMemoryResponseCache
from .memory_session_store import InMemorySessionStore
from .redis_catalog_repository import RedisCatalogRepository

__all__ = [
    "GeminiTextGenerator",
    "InMemoryCatalogRepository",
    "InMemoryQuotaStore",
    "InMemoryResponseCache",
    "InMemorySessionStore",
    "RedisCatalogRepository",
    "load_seed_items",
]
