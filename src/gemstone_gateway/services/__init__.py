"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (State / Collaborators)

Usage:
    ```python
    from gemstone_gateway.services import ChatService

    chat = ChatService.create(catalog=catalog, generator=generator)
    result = await chat.chat(text, "gemstone_recommendation", client_ip)
    ```
"""

from .catalog_matcher import CatalogMatcher
from .chat_service import ChatService, make_cache_key
from .content_policy import check_content, validate_request
from .extraction import extract_parameters
from .prompts import build_prompt, format_price

__all__ = [
    "CatalogMatcher",
    "ChatService",
    "build_prompt",
    "check_content",
    "extract_parameters",
    "format_price",
    "make_cache_key",
    "validate_request",
]
