"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Handoff API
    HANDOFF_API_URL: str = "http://localhost:3000"
    HANDOFF_API_TOKEN: str = ""
    HTTP_TIMEOUT_SECONDS: float = 30.0
    FETCH_CONCURRENCY: int = 8

    # Redis (empty URL disables the component cache)
    REDIS_URL: str = ""
    CACHE_TTL_SECONDS: int = 300

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    LOG_LEVEL: str = "info"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


@lru_cache
def get_settings() -> Settings:
    return Settings()
