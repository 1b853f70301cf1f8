"""
Settings tree of the service.

Each concern reads its own env prefix (SESSION_STORE_, GENERATION_,
UPLOAD_, LANGFUSE_); the root reads the unprefixed service options.

Dependencies: cv_roast.configs.*
System role: Single entry point to configuration
"""

from functools import lru_cache

from pydantic import Field

from cv_roast.configs.base import BaseSettings
from cv_roast.configs.generation import GenerationSettings
from cv_roast.configs.observability import ObservabilitySettings
from cv_roast.configs.session_store import SessionStoreSettings
from cv_roast.configs.upload import UploadSettings


class Settings(BaseSettings):
    """Root settings with one nested model per concern."""

    session_store: SessionStoreSettings = Field(default_factory=SessionStoreSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    upload: UploadSettings = Field(default_factory=UploadSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """
    Process-wide settings, read from the environment on first call.

    Tests that need different values build Settings() directly or patch
    this function where it is imported.
    """
    return Settings()
