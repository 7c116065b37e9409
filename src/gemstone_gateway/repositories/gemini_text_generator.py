"""Gemini-based text generator.

Calls the Gemini ``generateContent`` REST endpoint directly with httpx:

    POST {base_url}/models/{model}:generateContent
    x-goog-api-key: <GEMINI_API_KEY>

Provider failures are translated into the gateway's upstream error kinds
so the orchestrator can tell configuration problems, quota exhaustion and
timeouts apart.
"""

import logging
from typing import Any

import httpx

from gemstone_gateway.config import settings
from gemstone_gateway.entities import GenerationOptions
from gemstone_gateway.errors import (
    UpstreamConfigError,
    UpstreamQuotaExceededError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


class GeminiTextGenerator:
    """Gemini implementation of the TextGenerator protocol.

    This class satisfies the TextGenerator protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        generator = GeminiTextGenerator.create(model_name="gemini-1.5-flash")
        text = await generator.generate("Say hello in one line", GenerationOptions())
        await generator.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Gemini generator.

        Args:
            api_key: Gemini API key. Defaults to settings.gemini_api_key.
            model_name: Model identifier. Defaults to settings.gemini_model.
            base_url: API base URL. Defaults to settings.gemini_base_url.
            timeout: Request timeout in seconds. Defaults to settings.
            transport: Optional httpx transport (used by tests).
        """
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._model_name = model_name or settings.gemini_model
        self._base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self._timeout = timeout or settings.generation_timeout_seconds
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        api_key: str | None = None,
    ) -> "GeminiTextGenerator":
        """Factory method to create GeminiTextGenerator with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            api_key: API key. If None, uses settings.

        Returns:
            Configured GeminiTextGenerator
        """
        return cls(api_key=api_key, model_name=model_name)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @property
    def model_name(self) -> str:
        return self._model_name

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def _build_payload(self, prompt: str, options: GenerationOptions) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "maxOutputTokens": options.max_output_tokens,
                "temperature": options.temperature,
                "topP": options.top_p,
                "topK": options.top_k,
                "candidateCount": 1,
                "stopSequences": list(options.stop_sequences),
            },
        }

    def _raise_for_error(self, response: httpx.Response) -> None:
        """Translate an error response into an upstream error kind."""
        try:
            error = response.json().get("error", {})
        except ValueError:
            error = {}
        status = str(error.get("status", "")).upper()
        detail = str(error.get("message", response.text)).upper()

        logger.warning(
            "Gemini returned HTTP %d (%s) for model %s",
            response.status_code,
            status or "no status",
            self._model_name,
        )

        if (
            response.status_code in (401, 403)
            or status in ("UNAUTHENTICATED", "PERMISSION_DENIED")
            or "API_KEY" in detail
            or "API KEY" in detail
        ):
            raise UpstreamConfigError()

        if response.status_code == 429 or status == "RESOURCE_EXHAUSTED" or "QUOTA" in detail:
            raise UpstreamQuotaExceededError()

        raise UpstreamUnavailableError()

    @staticmethod
    def _extract_text(data: dict[str, Any]) -> str:
        """Join the text parts of the first candidate.

        A prompt blocked by safety filters comes back without candidates
        or parts; that is reported as an empty string.
        """
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)

    async def generate(self, prompt: str, options: GenerationOptions) -> str:
        """Generate text for a prompt.

        Args:
            prompt: The full prompt
            options: Generation budget (length, randomness, stop markers)

        Returns:
            The generated text, possibly empty

        Raises:
            UpstreamConfigError: Missing or rejected API key
            UpstreamQuotaExceededError: Gemini quota exhausted
            UpstreamTimeoutError: No answer within the timeout
            UpstreamUnavailableError: Any other transport or protocol failure
        """
        if not self._api_key:
            raise UpstreamConfigError()

        url = f"{self._base_url}/models/{self._model_name}:generateContent"

        try:
            response = await self.client.post(
                url,
                json=self._build_payload(prompt, options),
                headers={"x-goog-api-key": self._api_key},
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError() from e
        except httpx.HTTPError as e:
            logger.warning("Gemini request failed: %s", e)
            raise UpstreamUnavailableError() from e

        if response.status_code >= 400:
            self._raise_for_error(response)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailableError() from e

        return self._extract_text(data)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
