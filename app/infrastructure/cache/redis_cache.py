"""Redis-based cache service.

Provides async Redis caching with TTL support. Used for the global post
listing and per-user derived views. Integrates with
app.infrastructure.cache.keys for key format (DRY).

Every failure (connection, timeout, bad payload) is logged and reported as a
miss or a failed write; callers never see a Redis exception.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Awaitable, Callable

import redis.asyncio as redis

from app.core.config import get_settings

logger = logging.getLogger(__name__)


class CacheService:
    """Async Redis cache service with TTL support.

    Uses app.core.config for connection settings. Call connect() at
    startup and disconnect() at shutdown.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI. When given,
                the service treats it as connected.
        """
        self.redis = redis_client
        self.settings = get_settings()
        self._connected = redis_client is not None

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is None:
            try:
                self.redis = redis.Redis(
                    host=self.settings.redis_host,
                    port=self.settings.redis_port,
                    db=self.settings.redis_db,
                    password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    socket_keepalive=True,
                )
                await self.redis.ping()
                self._connected = True
                logger.info(
                    "Redis cache connected: %s:%s",
                    self.settings.redis_host,
                    self.settings.redis_port,
                )
            except (redis.ConnectionError, redis.TimeoutError) as e:
                logger.warning(
                    "Redis connection failed: %s. Cache disabled.",
                    e,
                )
                self._connected = False
                self.redis = None

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            self._connected = False
            logger.info("Redis cache disconnected")

    async def _reconnect(self) -> bool:
        """Attempt to reconnect after disconnect. Returns True if reconnected."""
        if self.redis is None:
            return False
        try:
            await self.redis.aclose()
        except redis.RedisError as e:
            logger.debug("Ignoring error while closing stale Redis client: %s", e)
        self.redis = None
        self._connected = False
        await self.connect()
        return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    @staticmethod
    def _decode(key: str, value: str | None) -> Any | None:
        """JSON-decode a stored value; undecodable values count as a miss."""
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        try:
            decoded = json.loads(value)
        except (TypeError, ValueError):
            logger.warning("Cache value for %s is not valid JSON; treating as miss", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return decoded

    async def _execute(
        self,
        op: str,
        key: str,
        call: Callable[[redis.Redis], Awaitable[Any]],
    ) -> tuple[bool, Any]:
        """Run one Redis command, retrying once after a dropped connection.

        Returns (ok, result); ok is False when the command could not be run.
        """
        if not self.is_available() or self.redis is None:
            return False, None
        try:
            return True, await call(self.redis)
        except (redis.ConnectionError, redis.TimeoutError):
            if not await self._reconnect() or self.redis is None:
                logger.warning("Cache %s unavailable for key %s (Redis disconnected)", op, key)
                return False, None
            try:
                return True, await call(self.redis)
            except redis.RedisError:
                logger.exception("Cache %s error for key %s after reconnect", op, key)
                return False, None
        except redis.RedisError:
            logger.exception("Cache %s error for key %s", op, key)
            return False, None

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing/unavailable.

        Args:
            key: Cache key (use app.infrastructure.cache.keys builders).
        """
        ok, raw = await self._execute("get", key, lambda r: r.get(key))
        return self._decode(key, raw) if ok else None

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store a JSON-serializable value with a TTL in seconds. True on success."""
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError):
            logger.exception("Cache value for key %s is not JSON-serializable", key)
            return False
        ok, _ = await self._execute("set", key, lambda r: r.setex(key, ttl, serialized))
        if ok:
            logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)
        return ok

    async def delete(self, key: str) -> bool:
        """Remove key from cache. Returns True if the delete was issued."""
        ok, _ = await self._execute("delete", key, lambda r: r.delete(key))
        if ok:
            logger.debug("Cache DELETE: %s", key)
        return ok
