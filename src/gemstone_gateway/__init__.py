"""Gemstone Gateway - rate-limited, cached gemstone recommendation chat.

This package provides a layered architecture for the chat gateway:

Layers:
    - protocols: Interface contracts (CatalogLookup, TextGenerator, stores)
    - repositories: In-memory state, catalog backends and the Gemini client
    - services: Extraction, content policy, prompts and orchestration
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from gemstone_gateway.repositories import GeminiTextGenerator, InMemoryCatalogRepository
    from gemstone_gateway.services import ChatService

    chat = ChatService.create(
        catalog=InMemoryCatalogRepository.create(),
        generator=GeminiTextGenerator.create(),
    )
    ```

For HTTP API:
    ```python
    from gemstone_gateway.api.app import app
    ```
"""

from gemstone_gateway.config import get_redis_client, settings
from gemstone_gateway.dto import ChatRequest, ChatResponse
from gemstone_gateway.entities import CandidateItem, ChatResult, ExtractedParameters
from gemstone_gateway.errors import GatewayError
from gemstone_gateway.handlers import ChatHandler
from gemstone_gateway.protocols import (
    CatalogLookup,
    QuotaStore,
    ResponseCache,
    SessionStore,
    TextGenerator,
)
from gemstone_gateway.repositories import (
    GeminiTextGenerator,
    InMemoryCatalogRepository,
    RedisCatalogRepository,
)
from gemstone_gateway.services import ChatService, extract_parameters

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CatalogLookup",
    "QuotaStore",
    "ResponseCache",
    "SessionStore",
    "TextGenerator",
    # Services (business logic)
    "ChatService",
    "extract_parameters",
    # Handlers (HTTP)
    "ChatHandler",
    # Repositories
    "GeminiTextGenerator",
    "InMemoryCatalogRepository",
    "RedisCatalogRepository",
    # Entities (domain models)
    "CandidateItem",
    "ChatResult",
    "ExtractedParameters",
    # Errors
    "GatewayError",
    # DTOs (API contracts)
    "ChatRequest",
    "ChatResponse",
]
