"""
Test suite for dependency injection container and settings.

Verifies that the service cache wires the pipeline to the configured store
and that the application lifespan opens and closes it.

System role: Verification of DI container
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from cv_roast.api.deps.dependencies import ServiceCache, get_service_cache
from cv_roast.api.main import create_app
from cv_roast.application.services import CritiquePipeline
from cv_roast.boundary.store import InMemorySessionStore
from cv_roast.configs import Settings, get_settings


@pytest.fixture
def settings(monkeypatch) -> Settings:
    """Settings resolved from a controlled environment."""
    monkeypatch.setenv("SESSION_STORE_BACKEND", "memory")
    monkeypatch.setenv("SESSION_STORE_TTL_SECONDS", "120")
    monkeypatch.setenv("GENERATION_TIMEOUT_SECONDS", "7.5")
    monkeypatch.setenv("UPLOAD_MAX_FILE_SIZE_BYTES", "1024")
    return Settings()


class TestSettings:
    """Environment-driven configuration."""

    def test_nested_settings_read_prefixed_env(self, settings: Settings) -> None:
        assert settings.session_store.backend == "memory"
        assert settings.session_store.ttl_seconds == 120
        assert settings.generation.timeout_seconds == 7.5
        assert settings.upload.max_file_size_bytes == 1024

    def test_defaults(self, monkeypatch) -> None:
        for name in ("SESSION_STORE_TTL_SECONDS", "SESSION_STORE_DOCUMENT_PREFIX", "UPLOAD_ALLOWED_EXTENSIONS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.session_store.ttl_seconds == 24 * 60 * 60
        assert settings.session_store.document_prefix == "cv_"
        assert settings.upload.allowed_extensions == {".pdf"}

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


class TestServiceCache:
    """Test suite for ServiceCache."""

    def test_pipeline_is_built_once_over_the_cached_store(self, settings: Settings) -> None:
        cache = ServiceCache()

        with patch("cv_roast.api.deps.dependencies.get_settings", return_value=settings):
            pipeline = cache.pipeline
            store = cache.store

        assert isinstance(pipeline, CritiquePipeline)
        assert isinstance(store, InMemorySessionStore)
        assert cache.pipeline is pipeline

    def test_prompts_published_when_registry_enabled(self, settings: Settings, monkeypatch) -> None:
        monkeypatch.setenv("GENERATION_USE_PROMPT_REGISTRY", "true")
        monkeypatch.setenv("GENERATION_PROMPT_LABEL", "production")
        monkeypatch.setenv("GENERATION_CRITIQUE_MODEL", "gemini-critique")
        monkeypatch.setenv("GENERATION_RECOMMENDATION_MODEL", "gemini-recommend")
        registry_settings = Settings()
        cache = ServiceCache()

        with patch("cv_roast.api.deps.dependencies.get_settings", return_value=registry_settings), patch(
            "cv_roast.api.deps.dependencies.register_prompts"
        ) as register, patch("cv_roast.core.critique.critique_prompt.PromptRegistry") as registry_cls:
            registry_cls.return_value.is_enabled = False
            cache.pipeline
            cache.pipeline

        register.assert_called_once_with(
            "gemini-critique",
            "gemini-recommend",
            labels=["production"],
        )

    def test_prompts_published_with_default_labels_when_no_label(self, settings: Settings, monkeypatch) -> None:
        monkeypatch.setenv("GENERATION_USE_PROMPT_REGISTRY", "true")
        monkeypatch.delenv("GENERATION_PROMPT_LABEL", raising=False)
        registry_settings = Settings()
        cache = ServiceCache()

        with patch("cv_roast.api.deps.dependencies.get_settings", return_value=registry_settings), patch(
            "cv_roast.api.deps.dependencies.register_prompts"
        ) as register, patch("cv_roast.core.critique.critique_prompt.PromptRegistry") as registry_cls:
            registry_cls.return_value.is_enabled = False
            cache.pipeline

        register.assert_called_once()
        assert register.call_args.kwargs == {"labels": None}

    def test_prompts_not_published_when_registry_disabled(self, settings: Settings) -> None:
        assert settings.generation.use_prompt_registry is False
        cache = ServiceCache()

        with patch("cv_roast.api.deps.dependencies.get_settings", return_value=settings), patch(
            "cv_roast.api.deps.dependencies.register_prompts"
        ) as register:
            cache.pipeline

        register.assert_not_called()

    @pytest.mark.asyncio
    async def test_aclose_closes_store_and_resets(self, settings: Settings) -> None:
        cache = ServiceCache()
        with patch("cv_roast.api.deps.dependencies.get_settings", return_value=settings):
            store = cache.store
        store.close = AsyncMock()

        await cache.aclose()

        store.close.assert_awaited_once()
        assert cache._store is None
        assert cache._pipeline is None

    def test_lifespan_prewarms_and_clears_cache(self, settings: Settings) -> None:
        with patch("cv_roast.api.deps.dependencies.get_settings", return_value=settings), patch(
            "cv_roast.api.main.configure_logging"
        ) as configure:
            with TestClient(create_app()) as client:
                assert get_service_cache()._pipeline is not None
                assert client.get("/api/v1/health").status_code == 200

        configure.assert_called_once()
        assert get_service_cache()._pipeline is None
