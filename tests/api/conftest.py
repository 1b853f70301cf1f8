"""
API test fixtures.

Provides an application whose pipeline and store dependencies are
overridden with in-memory, fake-model instances. The lifespan is not run,
so no real clients are created.
"""

import pytest
from fastapi.testclient import TestClient

from cv_roast.api.deps import get_critique_pipeline, get_session_store_dependency
from cv_roast.api.main import create_app
from cv_roast.application.services import CritiquePipeline
from tests.helpers import (
    critique_generator,
    critique_json,
    fake_model,
    recommendation_generator,
    recommendations_json,
)


@pytest.fixture
def critique_model():
    """Chat model used for the initial critique."""
    return fake_model(critique_json("### EPIC FAILURES\nComic Sans.", 88, 3))


@pytest.fixture
def recommendation_model():
    """Chat model used for the deep analysis."""
    return fake_model(recommendations_json())


@pytest.fixture
def pipeline(memory_store, keys, fallback_pool, critique_model, recommendation_model) -> CritiquePipeline:
    """Pipeline over the in-memory store and fake models."""
    return CritiquePipeline(
        store=memory_store,
        critique_generator=critique_generator(critique_model),
        recommendation_generator=recommendation_generator(recommendation_model),
        fallback_pool=fallback_pool,
        keys=keys,
    )


@pytest.fixture
def app(pipeline, memory_store):
    """Application with pipeline and store overridden."""
    app = create_app()
    app.dependency_overrides[get_critique_pipeline] = lambda: pipeline
    app.dependency_overrides[get_session_store_dependency] = lambda: memory_store
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Test client (lifespan not entered)."""
    return TestClient(app)
