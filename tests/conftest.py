"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory session store on a fake clock, PDF fixtures, key
namespace, fallback pool
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import pytest

from cv_roast.boundary.store import InMemorySessionStore, SessionKeys
from cv_roast.core.critique.fallback_pool import FallbackPool
from tests.helpers import FakeClock, build_pdf


@pytest.fixture
def make_pdf():
    """Provide the minimal PDF builder."""
    return build_pdf


@pytest.fixture
def resume_pdf() -> bytes:
    """Two-page document with recognizable text."""
    return build_pdf([
        ["Jane Doe", "Senior Engineer at Initech"],
        ["Skills: Python, SQL", "Education: BSc Computer Science"],
    ])


@pytest.fixture
def clock() -> FakeClock:
    """Provide a hand-driven clock."""
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> InMemorySessionStore:
    """Provide an in-memory store driven by the fake clock."""
    return InMemorySessionStore(clock=clock)


@pytest.fixture
def keys() -> SessionKeys:
    """Provide the default key namespace."""
    return SessionKeys()


@pytest.fixture
def fallback_pool() -> FallbackPool:
    """Provide a fallback pool."""
    return FallbackPool()
