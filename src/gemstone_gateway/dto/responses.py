"""Response DTOs for API endpoints."""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class PriceRangeItem(BaseModel):
    """Price band of a suggested item."""

    min: float | None = Field(None, description="Minimum price")
    max: float | None = Field(None, description="Maximum price")
    currency: str = Field("INR", description="ISO currency code")


class CandidateItemResponse(BaseModel):
    """Single suggested catalog item."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Catalog identifier")
    display_name: str = Field(..., alias="displayName", description="Name shown to the user")
    category: str = Field(..., description="Gemstone category")
    price_range: PriceRangeItem | None = Field(
        None, alias="priceRange", description="Price band, null when unpriced"
    )
    slug: str = Field("", description="URL-friendly item name")


class ChatResponse(BaseModel):
    """Response DTO for the chat endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    response: str = Field(..., description="One-line reply")
    candidates: list[CandidateItemResponse] = Field(
        default_factory=list,
        description="Suggested catalog items (at most 3)",
    )
    served_from_cache: bool = Field(
        ..., alias="servedFromCache", description="Whether the reply came from the cache"
    )
    rate_limit_remaining: int = Field(
        ..., alias="rateLimitRemaining", description="Requests left in the current window", ge=0
    )
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class RateLimitStatus(BaseModel):
    """Quota configuration and the caller's usage."""

    model_config = ConfigDict(populate_by_name=True)

    window_seconds: float = Field(..., alias="windowSeconds", ge=0)
    max: int = Field(..., description="Requests allowed per window", ge=0)
    current: int = Field(..., description="Requests consumed by the caller", ge=0)
    remaining: int = Field(..., ge=0)


class StatusResponse(BaseModel):
    """Response DTO for the status endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    service_available: bool = Field(..., alias="serviceAvailable")
    rate_limit: RateLimitStatus = Field(..., alias="rateLimit")
    session_request_count: int = Field(..., alias="sessionRequestCount", ge=0)
    restrictions: dict = Field(default_factory=dict)


class ResetLimitResponse(BaseModel):
    """Response DTO for the development reset endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: str
    new_limit: int = Field(..., alias="newLimit")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    generator_configured: bool = Field(..., description="Whether a generator API key is set")
    catalog_healthy: bool = Field(..., description="Whether the catalog backend is reachable")
