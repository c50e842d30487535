"""Unit tests for CacheService: Redis failures are misses, never errors."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import redis.asyncio as redis

from app.infrastructure.cache.redis_cache import CacheService


@pytest.fixture
def redis_client() -> AsyncMock:
    client = AsyncMock()
    client.get = AsyncMock(return_value=None)
    client.setex = AsyncMock(return_value=True)
    client.delete = AsyncMock(return_value=1)
    return client


async def test_get_decodes_json(redis_client) -> None:
    redis_client.get.return_value = json.dumps({"version": 1, "items": []})
    svc = CacheService(redis_client)
    assert await svc.get("posts:all") == {"version": 1, "items": []}


async def test_get_miss_returns_none(redis_client) -> None:
    svc = CacheService(redis_client)
    assert await svc.get("posts:all") is None


async def test_get_invalid_json_is_miss(redis_client) -> None:
    redis_client.get.return_value = "{not json"
    svc = CacheService(redis_client)
    assert await svc.get("posts:all") is None


async def test_set_uses_setex_with_ttl(redis_client) -> None:
    svc = CacheService(redis_client)
    assert await svc.set("posts:all", {"a": 1}, ttl=43200) is True
    redis_client.setex.assert_awaited_once_with("posts:all", 43200, json.dumps({"a": 1}))


async def test_set_unserializable_value_returns_false(redis_client) -> None:
    svc = CacheService(redis_client)
    assert await svc.set("k", {"when": object()}) is False
    redis_client.setex.assert_not_awaited()


async def test_redis_error_on_get_is_miss(redis_client) -> None:
    redis_client.get.side_effect = redis.ResponseError("WRONGTYPE")
    svc = CacheService(redis_client)
    assert await svc.get("posts:all") is None


async def test_connection_error_reconnect_failure(redis_client) -> None:
    """A dropped connection with no server to reconnect to disables the cache."""
    redis_client.setex.side_effect = redis.ConnectionError("gone")
    svc = CacheService(redis_client)
    failing = MagicMock()
    failing.ping = AsyncMock(side_effect=redis.ConnectionError("refused"))
    with patch("app.infrastructure.cache.redis_cache.redis.Redis", return_value=failing):
        assert await svc.set("posts:all", [], ttl=10) is False
    assert svc.is_available() is False
    assert await svc.get("posts:all") is None


async def test_delete_error_returns_false(redis_client) -> None:
    redis_client.delete.side_effect = redis.ResponseError("boom")
    svc = CacheService(redis_client)
    assert await svc.delete("posts:all") is False


async def test_disconnect_closes_client(redis_client) -> None:
    svc = CacheService(redis_client)
    await svc.disconnect()
    redis_client.aclose.assert_awaited_once()
    assert svc.is_available() is False


async def test_unavailable_service_skips_redis() -> None:
    svc = CacheService()
    assert svc.is_available() is False
    assert await svc.get("k") is None
    assert await svc.set("k", 1) is False
    assert await svc.delete("k") is False
