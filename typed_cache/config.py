"""
Configuration for the typed cache.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheConfiguration(BaseSettings):
    """Per-instance cache switches.

    Frozen once built: a TypedCache reads ``cache_enabled`` on every call but
    the value never changes underneath it.
    """

    model_config = SettingsConfigDict(
        env_prefix="TYPED_CACHE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    cache_enabled: bool = Field(default=True, description="Global kill switch for every cache operation")
    key_prefix: Optional[str] = Field(default="", description="Prepended verbatim to every cache key")


class BackendSettings(BaseSettings):
    """Connection settings for the distributed cache backend."""

    model_config = SettingsConfigDict(
        env_prefix="TYPED_CACHE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="info")

    redis_url: str = Field(default="redis://localhost:6379/0")
    socket_timeout: float = Field(default=5.0)
    socket_connect_timeout: float = Field(default=5.0)
    health_check_interval: int = Field(default=30)


def get_cache_configuration(**overrides) -> CacheConfiguration:
    """Build the cache configuration from the environment."""
    return CacheConfiguration(**overrides)


def get_backend_settings(**overrides) -> BackendSettings:
    """Build backend connection settings from the environment."""
    return BackendSettings(**overrides)
