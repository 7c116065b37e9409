"""Error taxonomy for the chat gateway.

Every caller-visible failure is a ``GatewayError`` subclass with a stable
``kind``, a human-readable ``message`` and the HTTP status the handler uses.
Messages never carry stack traces or collaborator identifiers.
"""

from typing import Any


class GatewayError(Exception):
    """Base class for all gateway failures surfaced to the caller."""

    kind: str = "gateway_error"
    status_code: int = 500
    retryable: bool = False
    default_message: str = "Failed to process your request. Please try again."

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra: dict[str, Any] = extra
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the structured error body returned to callers."""
        return {
            "error": self.message,
            "kind": self.kind,
            "retryable": self.retryable,
            **self.extra,
        }


class ValidationFailedError(GatewayError):
    """Malformed, oversized or wrong-topic input."""

    kind = "validation_failed"
    status_code = 400
    default_message = "Invalid request."


class ContentRejectedError(GatewayError):
    """Input matched the abuse deny-list."""

    kind = "content_rejected"
    status_code = 400
    default_message = (
        "Message contains inappropriate content. Please keep your questions respectful."
    )


class RateLimitExceededError(GatewayError):
    """Hourly quota exhausted for the client identity."""

    kind = "rate_limit_exceeded"
    status_code = 429
    retryable = True
    default_message = "Too many AI requests. Please try again in an hour."

    def __init__(self, retry_after: float, remaining: int = 0, message: str | None = None) -> None:
        self.retry_after = retry_after
        self.remaining = remaining
        super().__init__(message, retry_after=round(retry_after, 1), remaining=remaining)


class ThrottledError(GatewayError):
    """Minimum interval between requests not yet elapsed."""

    kind = "throttled"
    status_code = 429
    retryable = True

    def __init__(self, seconds_remaining: float, min_interval: float) -> None:
        self.seconds_remaining = seconds_remaining
        super().__init__(
            f"Please wait at least {min_interval:g} seconds between requests.",
            seconds_remaining=round(seconds_remaining, 1),
        )


class UpstreamConfigError(GatewayError):
    """Generator credentials or configuration are invalid."""

    kind = "upstream_config_error"
    status_code = 500
    default_message = "AI service configuration error. Please contact support."


class UpstreamQuotaExceededError(GatewayError):
    """The generator reported its own quota as exhausted."""

    kind = "upstream_quota_exceeded"
    status_code = 503
    retryable = True
    default_message = "AI service temporarily unavailable. Please try again later."


class UpstreamEmptyResponseError(GatewayError):
    """The generator returned nothing usable."""

    kind = "upstream_empty_response"
    status_code = 502
    retryable = True
    default_message = "AI service returned empty response. Please try again."


class UpstreamTimeoutError(GatewayError):
    """The generator did not answer within the request timeout."""

    kind = "upstream_timeout"
    status_code = 504
    retryable = True
    default_message = "AI service took too long to respond. Please try again."


class UpstreamUnavailableError(GatewayError):
    """Any other upstream transport or protocol failure."""

    kind = "upstream_unavailable"
    status_code = 502
    retryable = True
    default_message = "AI service is unavailable right now. Please try again."


class CatalogLookupError(Exception):
    """Raised by catalog repositories; never surfaced to the caller."""
