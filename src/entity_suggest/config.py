import os
from dataclasses import dataclass, field
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

_CACHE_BACKENDS = ("memory", "redis")
_ENTITY_KINDS = ("chef", "dish", "cuisine", "ingredient", "restaurant")


def _csv(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(part.strip().lower() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "memory")
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "suggest")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "300"))  # 5 minutes

    # External lookups
    lookup_timeout: float = float(os.getenv("LOOKUP_TIMEOUT", "5.0"))
    breaker_max_failures: int = int(os.getenv("BREAKER_MAX_FAILURES", "3"))
    breaker_failure_window: float = float(os.getenv("BREAKER_FAILURE_WINDOW", "60"))
    # Paid API: trip sooner, recover sooner
    places_max_failures: int = int(os.getenv("PLACES_MAX_FAILURES", "2"))
    places_failure_window: float = float(os.getenv("PLACES_FAILURE_WINDOW", "30"))
    min_external_query_length: int = int(os.getenv("MIN_EXTERNAL_QUERY_LENGTH", "2"))
    chef_verify_limit: int = int(os.getenv("CHEF_VERIFY_LIMIT", "5"))

    wikidata_endpoint: str = os.getenv("WIKIDATA_ENDPOINT", "https://query.wikidata.org/sparql")
    wikipedia_base_url: str = os.getenv("WIKIPEDIA_BASE_URL", "https://en.wikipedia.org")
    places_endpoint: str = os.getenv(
        "PLACES_ENDPOINT", "https://places.googleapis.com/v1/places:searchText"
    )
    google_places_api_key: str | None = os.getenv("GOOGLE_PLACES_API_KEY")
    http_user_agent: str = os.getenv(
        "HTTP_USER_AGENT", "EntitySuggest/0.1 (recipe preference autocomplete; python-httpx)"
    )

    # Suggestions
    static_result_threshold: int = int(os.getenv("STATIC_RESULT_THRESHOLD", "8"))
    default_limit: int = int(os.getenv("DEFAULT_LIMIT", "10"))
    enhanced_limit: int = int(os.getenv("ENHANCED_LIMIT", "15"))
    max_limit: int = int(os.getenv("MAX_LIMIT", "50"))
    popular_limit: int = int(os.getenv("POPULAR_LIMIT", "12"))
    external_on_miss_kinds: tuple[str, ...] = field(
        default_factory=lambda: _csv("EXTERNAL_ON_MISS_KINDS", "dish")
    )
    # Hand-tuned for English demonyms; see DESIGN.md
    demonym_suffixes: tuple[str, ...] = field(
        default_factory=lambda: _csv("DEMONYM_SUFFIXES", "an,ian,ean,ese,ish,i,ic,aican")
    )

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def places_enabled(self) -> bool:
        """Whether the paid restaurant search is configured."""
        return bool(self.google_places_api_key)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend not in _CACHE_BACKENDS:
            raise ValueError(
                f"CACHE_BACKEND must be one of {list(_CACHE_BACKENDS)}, got {self.cache_backend!r}"
            )

        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be positive")

        if self.lookup_timeout <= 0:
            raise ValueError("LOOKUP_TIMEOUT must be positive")

        for name in ("breaker_max_failures", "places_max_failures"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name.upper()} must be at least 1")

        for name in ("breaker_failure_window", "places_failure_window"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be positive")

        for name in ("default_limit", "enhanced_limit", "max_limit", "popular_limit"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name.upper()} must be at least 1")

        if self.default_limit > self.max_limit or self.enhanced_limit > self.max_limit:
            raise ValueError("DEFAULT_LIMIT and ENHANCED_LIMIT must not exceed MAX_LIMIT")

        unknown = [kind for kind in self.external_on_miss_kinds if kind not in _ENTITY_KINDS]
        if unknown:
            raise ValueError(f"EXTERNAL_ON_MISS_KINDS contains unknown entity kinds: {unknown}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(config: Settings | None = None) -> redis.Redis:
    """Create an asyncio Redis client instance."""
    config = config or settings
    return redis.from_url(
        config.redis_url,
        password=config.redis_password,
        decode_responses=True,
    )
