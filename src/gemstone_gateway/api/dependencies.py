"""Wiring of the chat gateway into the FastAPI app.

The lifespan builds the catalog, the Gemini client and the in-memory quota,
session and cache stores once per process and keeps the resulting handler on
``app.state``; route dependencies read it back from the request.
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from gemstone_gateway.config import settings
from gemstone_gateway.handlers import ChatHandler
from gemstone_gateway.logging_config import setup_logging
from gemstone_gateway.protocols import CatalogLookup
from gemstone_gateway.repositories import (
    GeminiTextGenerator,
    InMemoryCatalogRepository,
    RedisCatalogRepository,
)
from gemstone_gateway.services import ChatService

logger = logging.getLogger(__name__)


def build_catalog() -> CatalogLookup:
    """Create the catalog backend selected by CATALOG_BACKEND."""
    if settings.catalog_backend == "redis":
        return RedisCatalogRepository.create()
    return InMemoryCatalogRepository.create()


def get_handler(request: Request) -> ChatHandler:
    """Dependency injection for ChatHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "chat_handler", None)
    if handler is None:
        raise RuntimeError("ChatHandler not initialized. Check lifespan setup.")
    return handler


def get_client_identity(request: Request) -> str:
    """Identify the caller for quota purposes by peer address."""
    if request.client is None:
        return "unknown"
    return request.client.host


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Catalog and generator collaborators
    2. Service (business logic) - stored in app.state.chat_service
    3. Handler (HTTP endpoints) - stored in app.state.chat_handler

    Cleanup:
        Closes the generator's HTTP client and removes services from app.state
    """
    setup_logging(settings)

    catalog = build_catalog()
    generator = GeminiTextGenerator.create()

    chat_service = ChatService.create(catalog=catalog, generator=generator)
    chat_handler = ChatHandler(chat_service=chat_service)

    app.state.chat_service = chat_service
    app.state.chat_handler = chat_handler
    app.state.generator = generator

    logger.info("Chat gateway initialized (catalog backend: %s)", settings.catalog_backend)
    logger.info(
        "Quota: %d requests per %.0fs, min interval %.0fs",
        settings.rate_limit_max_requests,
        settings.rate_limit_window_seconds,
        settings.session_min_interval_seconds,
    )
    if not generator.is_configured():
        logger.warning("GEMINI_API_KEY is not set; chat requests will fail with a configuration error")

    yield

    await generator.close()
    del app.state.chat_handler
    del app.state.chat_service
    del app.state.generator
    logger.info("Chat gateway shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ChatHandler, Depends(get_handler)]
IdentityDep = Annotated[str, Depends(get_client_identity)]
