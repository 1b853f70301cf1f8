"""
Redis session store.

Uses native Redis expiry (SET ... EX) so TTL eviction is owned by the
backend. Key enumeration uses SCAN, never KEYS.

Dependencies: redis (asyncio client), cv_roast.core.exceptions
System role: Production session store
"""

import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from cv_roast.boundary.store.session_store import SessionStore
from cv_roast.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class RedisSessionStore(SessionStore):
    """Session store backed by a redis-py asyncio client."""

    def __init__(self, client: Redis, scan_count: int = 500) -> None:
        """
        Initialize store.

        Args:
            client: Redis client created with decode_responses=True
            scan_count: COUNT hint for SCAN iterations
        """
        self._client = client
        self._scan_count = scan_count

    @classmethod
    def from_url(cls, url: str, socket_timeout_seconds: float = 10.0) -> "RedisSessionStore":
        """
        Create a store from a connection URL.

        Args:
            url: redis:// or rediss:// URL
            socket_timeout_seconds: Connect and read timeout

        Returns:
            RedisSessionStore: Store with its own connection pool
        """
        client = Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout_seconds,
            socket_connect_timeout=socket_timeout_seconds,
        )
        return cls(client)

    async def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
            return True
        except RedisError as e:
            logger.error(
                f"{__name__}:put - Redis write failed, continuing without persistence",
                extra={"key": key, "error_type": type(e).__name__},
            )
            return False

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except RedisError as e:
            raise StorageError("Redis read failed", operation="get", key=key) from e

    async def list_keys_with_prefix(self, prefix: str) -> set[str]:
        try:
            return {
                key async for key in self._client.scan_iter(match=f"{prefix}*", count=self._scan_count)
            }
        except RedisError as e:
            raise StorageError("Redis scan failed", operation="scan", key=prefix) from e

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except RedisError as e:
            logger.warning(f"{__name__}:ping - Redis unreachable", extra={"error_type": type(e).__name__})
            return False

    async def close(self) -> None:
        await self._client.aclose()
