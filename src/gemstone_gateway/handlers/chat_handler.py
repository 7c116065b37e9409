"""HTTP handlers for chat operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, headers and error bodies.
"""

import logging
import math

from fastapi import HTTPException, status

from gemstone_gateway.config import settings
from gemstone_gateway.dto import (
    CandidateItemResponse,
    ChatRequest,
    ChatResponse,
    HealthCheckResponse,
    PriceRangeItem,
    RateLimitStatus,
    ResetLimitResponse,
    StatusResponse,
)
from gemstone_gateway.entities import CandidateItem
from gemstone_gateway.errors import GatewayError, RateLimitExceededError, ThrottledError
from gemstone_gateway.services import ChatService

logger = logging.getLogger(__name__)


def to_candidate_response(item: CandidateItem) -> CandidateItemResponse:
    """Convert a candidate entity to its DTO."""
    price_range = None
    if item.price_range is not None:
        price_range = PriceRangeItem(
            min=item.price_range.min,
            max=item.price_range.max,
            currency=item.price_range.currency,
        )
    return CandidateItemResponse(
        id=item.id,
        display_name=item.display_name,
        category=item.category,
        price_range=price_range,
        slug=item.slug,
    )


def to_http_exception(error: GatewayError) -> HTTPException:
    """Map a gateway error to an HTTPException with a structured body."""
    headers = None
    if isinstance(error, RateLimitExceededError):
        headers = {"Retry-After": str(math.ceil(error.retry_after))}
    elif isinstance(error, ThrottledError):
        headers = {"Retry-After": str(math.ceil(error.seconds_remaining))}
    return HTTPException(status_code=error.status_code, detail=error.to_dict(), headers=headers)


class ChatHandler:
    """HTTP handlers for the chat gateway.

    This handler delegates business logic to ChatService
    and handles HTTP-specific concerns like:
    - Converting entities to DTOs
    - Setting appropriate status codes and Retry-After headers
    - Hiding internal failures behind a generic message
    """

    def __init__(self, chat_service: ChatService, allow_reset: bool | None = None) -> None:
        """Initialize the chat handler.

        Args:
            chat_service: The chat service for business logic (required).
            allow_reset: Enable the reset-limit endpoint. Defaults to development mode.
        """
        self._chat = chat_service
        self._allow_reset = settings.is_development if allow_reset is None else allow_reset

    async def chat(self, request: ChatRequest, identity: str) -> ChatResponse:
        """Handle POST /api/gemstone-ai requests.

        Args:
            request: The chat request DTO
            identity: Caller identity (client address)

        Returns:
            ChatResponse with reply, candidates and cache flag

        Raises:
            HTTPException: With the error kind's status and structured detail
        """
        try:
            result = await self._chat.chat(request.text, request.topic, identity)
        except GatewayError as e:
            raise to_http_exception(e) from e
        except Exception as e:
            logger.exception("Chat request failed")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={
                    "error": "Failed to process your request. Please try again.",
                    "kind": "server_error",
                    "retryable": True,
                },
            ) from e

        return ChatResponse(
            response=result.response_text,
            candidates=[to_candidate_response(item) for item in result.candidates],
            served_from_cache=result.served_from_cache,
            rate_limit_remaining=result.rate_limit_remaining,
        )

    async def get_status(self, identity: str) -> StatusResponse:
        """Handle GET /api/gemstone-ai/status requests."""
        snapshot = self._chat.status(identity)
        return StatusResponse(
            service_available=snapshot.service_available,
            rate_limit=RateLimitStatus(
                window_seconds=snapshot.window_seconds,
                max=snapshot.max_requests,
                current=snapshot.consumed,
                remaining=snapshot.remaining,
            ),
            session_request_count=snapshot.session_request_count,
            restrictions=snapshot.restrictions,
        )

    async def reset_limit(self, identity: str) -> ResetLimitResponse:
        """Handle POST /api/gemstone-ai/reset-limit requests (development only).

        Raises:
            HTTPException: 403 outside development mode
        """
        if not self._allow_reset:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"error": "Not available in production", "kind": "forbidden"},
            )

        self._chat.reset_identity(identity)
        return ResetLimitResponse(
            success=True,
            message="Rate limit reset successfully",
            new_limit=self._chat.status(identity).max_requests,
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        checks = self._chat.is_healthy()
        healthy = checks["generator_configured"] and checks["catalog_healthy"]
        return HealthCheckResponse(
            status="healthy" if healthy else "degraded",
            generator_configured=checks["generator_configured"],
            catalog_healthy=checks["catalog_healthy"],
        )
