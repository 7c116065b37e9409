"""Chat service: the generation orchestrator.

Each call runs a fixed pipeline:

    Validate -> ContentPolicy -> RateLimit -> SessionGate -> Extract
        -> Match -> CacheCheck -> BuildPrompt -> Invoke -> ValidateOutput
        -> CacheStore -> Return

Matching runs before the cache check because the cache key includes the
number of candidates found. The cache therefore only saves the upstream
generation call, never the catalog lookup.
"""

import asyncio
import logging

from gemstone_gateway.config import settings
from gemstone_gateway.entities import (
    CandidateItem,
    ChatResult,
    ExtractedParameters,
    GatewayStatus,
    GenerationOptions,
)
from gemstone_gateway.errors import (
    GatewayError,
    RateLimitExceededError,
    ThrottledError,
    UpstreamConfigError,
    UpstreamEmptyResponseError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from gemstone_gateway.protocols import (
    CatalogLookup,
    QuotaStore,
    ResponseCache,
    SessionStore,
    TextGenerator,
)
from gemstone_gateway.repositories import (
    InMemoryQuotaStore,
    InMemoryResponseCache,
    InMemorySessionStore,
)

from .catalog_matcher import CatalogMatcher
from .content_policy import check_content, validate_request
from .extraction import extract_parameters
from .prompts import COLLECTION_ORDER, MAX_RESPONSE_WORDS, build_prompt

logger = logging.getLogger(__name__)


def make_cache_key(text: str, candidate_count: int) -> str:
    """Derive the response cache key from the message and match count."""
    return f"{text.strip().casefold()}|{candidate_count}"


def default_generation_options() -> GenerationOptions:
    """Build the generation budget from settings."""
    return GenerationOptions(
        max_output_tokens=settings.generation_max_output_tokens,
        temperature=settings.generation_temperature,
        top_p=settings.generation_top_p,
        top_k=settings.generation_top_k,
    )


class ChatService:
    """Rate-limited, cached chat orchestration.

    This service depends on PROTOCOLS, not concrete implementations:
    - CatalogLookup: in-memory, Redis, or any catalog backend
    - TextGenerator: Gemini or any other model
    - QuotaStore / SessionStore / ResponseCache: in-memory by default

    Example:
        ```python
        from gemstone_gateway.repositories import GeminiTextGenerator, InMemoryCatalogRepository
        from gemstone_gateway.services import ChatService

        chat = ChatService.create(
            catalog=InMemoryCatalogRepository.create(),
            generator=GeminiTextGenerator.create(),
        )
        result = await chat.chat("budget 20000 emerald", "gemstone_recommendation", "10.0.0.7")
        ```
    """

    def __init__(
        self,
        catalog: CatalogLookup,
        generator: TextGenerator,
        quota_store: QuotaStore,
        session_store: SessionStore,
        response_cache: ResponseCache,
        generation_options: GenerationOptions | None = None,
        generation_timeout: float | None = None,
        catalog_timeout: float | None = None,
        max_candidates: int | None = None,
        max_message_length: int | None = None,
        topic: str | None = None,
        currency_symbol: str | None = None,
    ) -> None:
        """Initialize the chat service.

        Args:
            catalog: Catalog lookup backend (required).
            generator: Upstream text generator (required).
            quota_store: Sliding-window rate limiter state (required).
            session_store: Minimum-interval gate state (required).
            response_cache: Cache of generated replies (required).
            generation_options: Generation budget. Defaults to settings.
            generation_timeout: Seconds to wait for the generator. Defaults to settings.
            catalog_timeout: Seconds to wait for the catalog. Defaults to settings.
            max_candidates: Maximum catalog matches. Defaults to settings.
            max_message_length: Maximum message length. Defaults to settings.
            topic: The single accepted topic marker. Defaults to settings.
            currency_symbol: Symbol used in price display. Defaults to settings.
        """
        self._generator = generator
        self._quota = quota_store
        self._sessions = session_store
        self._cache = response_cache
        self._matcher = CatalogMatcher(
            catalog=catalog,
            timeout=catalog_timeout,
            max_candidates=max_candidates,
        )
        self._options = generation_options or default_generation_options()
        self._generation_timeout = generation_timeout or settings.generation_timeout_seconds
        self._max_length = max_message_length or settings.chat_max_message_length
        self._topic = topic or settings.chat_topic
        self._currency = currency_symbol or settings.currency_symbol

    @classmethod
    def create(
        cls,
        catalog: CatalogLookup,
        generator: TextGenerator,
        quota_store: QuotaStore | None = None,
        session_store: SessionStore | None = None,
        response_cache: ResponseCache | None = None,
    ) -> "ChatService":
        """Factory method to create ChatService with in-memory stores.

        Args:
            catalog: Catalog lookup backend (required).
            generator: Upstream text generator (required).
            quota_store: If None, an InMemoryQuotaStore from settings.
            session_store: If None, an InMemorySessionStore from settings.
            response_cache: If None, an InMemoryResponseCache from settings.

        Returns:
            Configured ChatService instance
        """
        return cls(
            catalog=catalog,
            generator=generator,
            quota_store=quota_store or InMemoryQuotaStore.create(),
            session_store=session_store or InMemorySessionStore.create(),
            response_cache=response_cache or InMemoryResponseCache.create(),
        )

    async def chat(self, text: object, topic: object, identity: str) -> ChatResult:
        """Answer one chat message.

        Args:
            text: The user's message
            topic: Topic marker; must equal the configured topic
            identity: Caller-distinguishing key (e.g. network address)

        Returns:
            ChatResult with the reply, candidates and cache flag

        Raises:
            ValidationFailedError: Malformed, oversized or wrong-topic input
            ContentRejectedError: Message matched the deny-list
            RateLimitExceededError: Hourly quota exhausted
            ThrottledError: Minimum interval not elapsed
            UpstreamConfigError, UpstreamQuotaExceededError,
            UpstreamTimeoutError, UpstreamUnavailableError,
            UpstreamEmptyResponseError: Generation failed
        """
        message = validate_request(text, topic, self._max_length, self._topic)

        try:
            check_content(message)
        except GatewayError:
            logger.warning("Content rejected for %s", identity)
            raise

        remaining = self._apply_rate_limit(identity)
        self._apply_session_gate(identity)

        params = extract_parameters(message)
        logger.debug("Extracted parameters: %s", params.present())

        candidates = await self._match(params)

        key = make_cache_key(message, len(candidates))
        cached = self._cache.get(key)
        if cached is not None:
            logger.info("Cache hit for: %s...", message[:30])
            return ChatResult(
                response_text=cached.response_text,
                candidates=cached.candidate_items,
                served_from_cache=True,
                rate_limit_remaining=remaining,
            )

        prompt = build_prompt(message, candidates, params, self._currency)
        response_text = await self._invoke(prompt)

        if not response_text or not response_text.strip():
            logger.warning("Upstream returned an empty response")
            raise UpstreamEmptyResponseError()
        response_text = response_text.strip()

        self._cache.put(key, response_text, candidates)

        logger.info(
            "Chat request from %s: %s... (%d chars, %d gems)",
            identity,
            message[:30],
            len(response_text),
            len(candidates),
        )
        return ChatResult(
            response_text=response_text,
            candidates=tuple(candidates),
            served_from_cache=False,
            rate_limit_remaining=remaining,
        )

    def _apply_rate_limit(self, identity: str) -> int:
        decision = self._quota.check_and_consume(identity)
        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s", identity)
            raise RateLimitExceededError(retry_after=decision.retry_after)
        return decision.remaining

    def _apply_session_gate(self, identity: str) -> None:
        decision = self._sessions.admit(identity)
        if not decision.admitted:
            logger.warning(
                "Throttled %s (%.1fs remaining)", identity, decision.seconds_remaining
            )
            raise ThrottledError(
                seconds_remaining=decision.seconds_remaining,
                min_interval=self._sessions.min_interval,
            )

    async def _match(self, params: ExtractedParameters) -> list[CandidateItem]:
        if not params.can_match_catalog:
            return []
        candidates = await self._matcher.find_candidates(params)
        logger.info("Found %d suggested gemstones", len(candidates))
        return candidates

    async def _invoke(self, prompt: str) -> str:
        """Call the generator under the request timeout.

        A cancelled call propagates without touching the cache.
        """
        try:
            return await asyncio.wait_for(
                self._generator.generate(prompt, self._options),
                timeout=self._generation_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.warning("Upstream generation timed out after %.1fs", self._generation_timeout)
            raise UpstreamTimeoutError() from e
        except asyncio.CancelledError:
            logger.info("Chat request cancelled during generation; nothing cached")
            raise
        except UpstreamConfigError:
            logger.error("Upstream generator is misconfigured (model %s)", self._generator.model_name)
            raise
        except GatewayError as e:
            logger.warning("Upstream generation failed: %s", e.kind)
            raise
        except Exception as e:
            logger.exception("Unexpected upstream generator failure")
            raise UpstreamUnavailableError() from e

    def status(self, identity: str) -> GatewayStatus:
        """Read-only quota configuration and usage for an identity."""
        consumed = self._quota.consumed(identity)
        session = self._sessions.get(identity)
        return GatewayStatus(
            service_available=self._generator.is_configured(),
            window_seconds=self._quota.window_seconds,
            max_requests=self._quota.max_requests,
            consumed=consumed,
            remaining=max(0, self._quota.max_requests - consumed),
            session_request_count=session.request_count if session else 0,
            restrictions={
                "max_message_length": self._max_length,
                "max_response_tokens": self._options.max_output_tokens,
                "max_response_words": MAX_RESPONSE_WORDS,
                "response_format": "one-line-parametrized",
                "required_parameters": [field for field, _ in COLLECTION_ORDER],
                "allowed_topic": self._topic,
                "min_interval_seconds": self._sessions.min_interval,
                "cache_enabled": True,
                "cache_ttl_seconds": self._cache.ttl,
            },
        )

    def reset_identity(self, identity: str) -> None:
        """Clear the identity's quota window and session record."""
        self._quota.reset(identity)
        self._sessions.reset(identity)
        logger.info("Rate limit reset for %s", identity)

    def is_healthy(self) -> dict[str, bool]:
        """Check collaborators without calling the generator."""
        return {
            "generator_configured": self._generator.is_configured(),
            "catalog_healthy": self._matcher.catalog.health_check(),
        }
