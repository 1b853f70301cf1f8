"""
Dependency injection container.

Factory functions for FastAPI dependencies. Clients (session store, chat
models) are explicit objects owned by the service cache and closed on
application shutdown.

Dependencies: cv_roast.configs, cv_roast.application, cv_roast.boundary
System role: DI container for service injection
"""

import logging

from cv_roast.application.services import CritiquePipeline, SessionCorrelator
from cv_roast.boundary.store import SessionKeys, SessionStore, get_session_store
from cv_roast.configs import get_settings
from cv_roast.configs.generation import GenerationSettings
from cv_roast.configs.upload import UploadSettings
from cv_roast.core.critique import CritiqueGenerator, FallbackPool, RecommendationGenerator
from cv_roast.core.critique.critique_prompt import register_prompts

logger = logging.getLogger(__name__)


def _publish_prompts(generation: GenerationSettings) -> None:
    """Push the local prompt templates to Langfuse when the registry is in use."""
    if not generation.use_prompt_registry:
        return

    labels = [generation.prompt_label] if generation.prompt_label else None
    register_prompts(
        generation.critique_model,
        generation.recommendation_model,
        labels=labels,
    )
    logger.info(
        f"{__name__}:_publish_prompts - Prompts registered",
        extra={"labels": labels or ["development"]},
    )


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._store: SessionStore | None = None
        self._pipeline: CritiquePipeline | None = None

    @property
    def store(self) -> SessionStore:
        """Get cached session store."""
        if self._store is None:
            self._store = get_session_store(get_settings().session_store)
        return self._store

    @property
    def pipeline(self) -> CritiquePipeline:
        """Get cached critique pipeline."""
        if self._pipeline is None:
            settings = get_settings()
            _publish_prompts(settings.generation)
            keys = SessionKeys.from_settings(settings.session_store)
            ttl_seconds = settings.session_store.ttl_seconds
            self._pipeline = CritiquePipeline(
                store=self.store,
                critique_generator=CritiqueGenerator.from_settings(settings.generation),
                recommendation_generator=RecommendationGenerator.from_settings(settings.generation),
                fallback_pool=FallbackPool(),
                correlator=SessionCorrelator(self.store, keys, ttl_seconds),
                keys=keys,
                ttl_seconds=ttl_seconds,
            )
        return self._pipeline

    async def aclose(self) -> None:
        """Close clients and clear all cached instances."""
        if self._store is not None:
            await self._store.close()
        self._store = None
        self._pipeline = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_critique_pipeline() -> CritiquePipeline:
    """
    Get critique pipeline instance.

    Returns:
        CritiquePipeline: Pipeline wired to the configured store and Gemini models
    """
    return get_service_cache().pipeline


def get_session_store_dependency() -> SessionStore:
    """Get the shared session store."""
    return get_service_cache().store


def get_upload_settings() -> UploadSettings:
    """Get upload validation limits."""
    return get_settings().upload
