"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Injecting isolated state and deterministic clocks in tests
- Swapping collaborators (in-memory catalog → Redis, Gemini → another model)
- Clear separation of concerns

Usage:
    ```python
    from gemstone_gateway.protocols import QuotaStore, TextGenerator

    # Type hints work with any implementation
    quota: QuotaStore = InMemoryQuotaStore()
    generator: TextGenerator = GeminiTextGenerator.create()
    ```
"""

from .catalog_lookup import CatalogLookup
from .quota_store import QuotaStore
from .response_cache import ResponseCache
from .session_store import SessionStore
from .text_generator import TextGenerator

__all__ = [
    "CatalogLookup",
    "QuotaStore",
    "ResponseCache",
    "SessionStore",
    "TextGenerator",
]
