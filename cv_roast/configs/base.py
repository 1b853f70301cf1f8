"""
Service-level settings shared by every config module.

Values come from the process environment or a local .env file. Nested
modules add their own env prefix; the fields here are unprefixed.

Dependencies: pydantic_settings
System role: Root of the configuration tree
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict


class BaseSettings(PydanticBaseSettings):
    """HTTP surface and logging options of the service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Root log level")
    api_prefix: str = Field(default="/api/v1", description="Path prefix for every router")
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser",
    )
    host: str = Field(default="0.0.0.0", description="Bind address for `python -m cv_roast.api.main`")
    port: int = Field(default=8000, gt=0, lt=65536)
