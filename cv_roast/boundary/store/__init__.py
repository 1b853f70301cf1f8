"""TTL session store backends."""

from cv_roast.boundary.store.redis_store import RedisSessionStore
from cv_roast.boundary.store.session_keys import SessionKeys
from cv_roast.boundary.store.session_store import InMemorySessionStore, SessionStore
from cv_roast.boundary.store.store_factory import get_session_store

__all__ = [
    "InMemorySessionStore",
    "RedisSessionStore",
    "SessionKeys",
    "SessionStore",
    "get_session_store",
]
