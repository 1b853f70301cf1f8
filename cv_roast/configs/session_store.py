"""
Session store configuration settings.

Selects the TTL key-value backend and the key namespace used for
extracted document text, critiques and external-id mappings.

Dependencies: pydantic_settings
System role: Storage configuration for session-scoped state
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SessionStoreSettings(BaseSettings):
    """Session store configuration (in-memory for dev, Redis for prod)."""

    model_config = SettingsConfigDict(
        env_prefix="SESSION_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    backend: str = Field(
        default="memory",
        description="Store backend: 'memory' for local dev, 'redis' for production",
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL (rediss:// for TLS)",
    )
    socket_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Redis connect/read timeout",
    )
    ttl_seconds: int = Field(
        default=24 * 60 * 60,
        gt=0,
        description="Lifetime of every session-scoped entry",
    )

    document_prefix: str = Field(default="cv_", description="Key prefix for extracted text")
    critique_prefix: str = Field(default="critique_", description="Key prefix for critiques")
    mapping_prefix: str = Field(default="map_", description="Key prefix for external-id mappings")
