import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Runtime
    app_env: str = os.getenv("APP_ENV", "production")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Rate limiter (sliding window per client identity)
    rate_limit_max_requests: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "15"))
    rate_limit_window_seconds: float = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "3600"))

    # Session gate
    session_min_interval_seconds: float = float(os.getenv("SESSION_MIN_INTERVAL_SECONDS", "10"))
    session_idle_ttl_seconds: float = float(os.getenv("SESSION_IDLE_TTL_SECONDS", "3600"))

    # Response cache
    response_cache_ttl_seconds: float = float(os.getenv("RESPONSE_CACHE_TTL_SECONDS", "600"))
    response_cache_max_entries: int = int(os.getenv("RESPONSE_CACHE_MAX_ENTRIES", "100"))

    # Chat request validation
    chat_max_message_length: int = int(os.getenv("CHAT_MAX_MESSAGE_LENGTH", "100"))
    chat_topic: str = os.getenv("CHAT_TOPIC", "gemstone_recommendation")

    # Catalog
    catalog_backend: str = os.getenv("CATALOG_BACKEND", "memory")  # "memory" or "redis"
    catalog_seed_path: str = os.getenv("CATALOG_SEED_PATH", "data/gemstones.json")
    catalog_key_prefix: str = os.getenv("CATALOG_KEY_PREFIX", "gemstone_catalog")
    catalog_timeout_seconds: float = float(os.getenv("CATALOG_TIMEOUT_SECONDS", "5"))
    catalog_max_candidates: int = int(os.getenv("CATALOG_MAX_CANDIDATES", "3"))
    currency_symbol: str = os.getenv("CURRENCY_SYMBOL", "₹")

    # Upstream generator (Gemini)
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
    gemini_base_url: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    generation_timeout_seconds: float = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "15"))
    generation_max_output_tokens: int = int(os.getenv("GENERATION_MAX_OUTPUT_TOKENS", "60"))
    generation_temperature: float = float(os.getenv("GENERATION_TEMPERATURE", "0.3"))
    generation_top_p: float = float(os.getenv("GENERATION_TOP_P", "0.6"))
    generation_top_k: int = int(os.getenv("GENERATION_TOP_K", "20"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    @property
    def is_development(self) -> bool:
        """Check if the development-only endpoints are enabled."""
        return self.app_env.lower() == "development"

    @property
    def generator_configured(self) -> bool:
        """Check if an upstream generator API key is present."""
        return bool(self.gemini_api_key)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.rate_limit_max_requests <= 0:
            raise ValueError("RATE_LIMIT_MAX_REQUESTS must be positive")

        if self.rate_limit_window_seconds <= 0:
            raise ValueError("RATE_LIMIT_WINDOW_SECONDS must be positive")

        if self.session_min_interval_seconds < 0:
            raise ValueError("SESSION_MIN_INTERVAL_SECONDS cannot be negative")

        if self.response_cache_ttl_seconds <= 0 or self.response_cache_max_entries <= 0:
            raise ValueError("RESPONSE_CACHE_TTL_SECONDS and RESPONSE_CACHE_MAX_ENTRIES must be positive")

        if self.chat_max_message_length <= 0:
            raise ValueError("CHAT_MAX_MESSAGE_LENGTH must be positive")

        if self.catalog_backend not in ("memory", "redis"):
            raise ValueError(
                f"CATALOG_BACKEND must be one of ['memory', 'redis'], got {self.catalog_backend}"
            )

        if not 0 <= self.generation_temperature <= 2:
            raise ValueError("GENERATION_TEMPERATURE must be between 0 and 2")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
