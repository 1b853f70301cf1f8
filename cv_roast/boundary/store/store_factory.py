"""
Session store factory for selecting between in-memory (dev) and Redis (prod).

Depends on SESSION_STORE_BACKEND environment variable.

Dependencies: cv_roast.boundary.store, cv_roast.configs
System role: Session store instantiation and selection
"""

import logging

from cv_roast.boundary.store.redis_store import RedisSessionStore
from cv_roast.boundary.store.session_store import InMemorySessionStore, SessionStore
from cv_roast.configs.session_store import SessionStoreSettings

logger = logging.getLogger(__name__)


def get_session_store(settings: SessionStoreSettings) -> SessionStore:
    """
    Create the session store selected by configuration.

    Args:
        settings: Session store settings

    Returns:
        SessionStore: InMemorySessionStore or RedisSessionStore

    Raises:
        ValueError: If the configured backend is unknown
    """
    backend = settings.backend.lower()

    if backend == "memory":
        logger.info(f"{__name__}:get_session_store - Creating in-memory store (local dev mode)")
        return InMemorySessionStore()

    if backend == "redis":
        logger.info(f"{__name__}:get_session_store - Creating Redis store (production mode)")
        return RedisSessionStore.from_url(
            settings.redis_url,
            socket_timeout_seconds=settings.socket_timeout_seconds,
        )

    raise ValueError(
        f"Invalid SESSION_STORE_BACKEND: {backend}. Must be 'memory' (dev) or 'redis' (production)."
    )
