"""Post feed cache: typed access to posts:all and per-user views.

The only module that knows how a cached post list is laid out. Values are
stored as a tagged envelope so a shape change never gets misread:

    {"version": 1, "items": [<post>, ...]}

Each item has the same camelCase shape the API returns for a post. An entry
with another version or a malformed item is treated as a miss.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from app.application.dtos.post import AuthorSummary, CategorySummary, PostResult
from app.application.interfaces.services import ICacheService
from app.core.constants import POST_FEED_CACHE_VERSION
from app.infrastructure.cache.keys import posts_all_key, profile_key, user_posts_key

logger = logging.getLogger(__name__)


def encode_post(post: PostResult) -> dict[str, Any]:
    """Return the JSON-ready dict for a post (API and cache shape)."""
    return {
        "id": post.id,
        "content": post.content,
        "author": {
            "id": post.author.id,
            "username": post.author.username,
            "fullname": post.author.fullname,
            "profilePicture": post.author.profile_picture,
        },
        "image": post.image,
        "tags": list(post.tags),
        "category": {"id": post.category.id, "name": post.category.name},
        "createdAt": post.created_at.isoformat(),
        "updatedAt": post.updated_at.isoformat(),
    }


def decode_post(data: dict[str, Any]) -> PostResult:
    """Build a PostResult from encode_post output. Raises on malformed input."""
    author = data["author"]
    category = data["category"]
    return PostResult(
        id=data["id"],
        content=data["content"],
        author=AuthorSummary(
            id=author["id"],
            username=author.get("username", ""),
            fullname=author.get("fullname", ""),
            profile_picture=author.get("profilePicture"),
        ),
        category=CategorySummary(id=category["id"], name=category["name"]),
        image=data.get("image"),
        tags=tuple(data.get("tags") or ()),
        created_at=datetime.fromisoformat(data["createdAt"]),
        updated_at=datetime.fromisoformat(data["updatedAt"]),
    )


def encode_feed(posts: list[PostResult]) -> dict[str, Any]:
    """Wrap posts in the versioned cache envelope."""
    return {
        "version": POST_FEED_CACHE_VERSION,
        "items": [encode_post(p) for p in posts],
    }


def decode_feed(raw: Any) -> list[PostResult] | None:
    """Unwrap a cache envelope; None when the version or any item is wrong."""
    if not isinstance(raw, dict) or raw.get("version") != POST_FEED_CACHE_VERSION:
        return None
    items = raw.get("items")
    if not isinstance(items, list):
        return None
    try:
        return [decode_post(item) for item in items]
    except (KeyError, TypeError, ValueError):
        return None


class PostFeedCache:
    """Read-through/write-invalidate cache for post listings.

    Wraps a key-value cache (CacheService, or None when Redis is disabled).
    Reads return None on any miss or failure; writes return False. The
    read-modify-write used by prepend/replace/remove is not atomic, so two
    concurrent writers can lose one patch until the entry expires or is
    dropped.
    """

    def __init__(
        self,
        cache: ICacheService | None,
        list_ttl: int,
        user_posts_ttl: int,
    ) -> None:
        self.cache = cache
        self.list_ttl = list_ttl
        self.user_posts_ttl = user_posts_ttl

    def _enabled(self) -> bool:
        return self.cache is not None and self.cache.is_available()

    async def _read(self, key: str) -> list[PostResult] | None:
        if not self._enabled():
            return None
        raw = await self.cache.get(key)
        if raw is None:
            return None
        posts = decode_feed(raw)
        if posts is None:
            logger.warning("Discarding unreadable post feed entry %s", key)
        return posts

    async def _write(self, key: str, posts: list[PostResult], ttl: int) -> bool:
        if not self._enabled():
            return False
        return await self.cache.set(key, encode_feed(posts), ttl=ttl)

    async def get_all(self) -> list[PostResult] | None:
        """Return the cached global listing or None on miss."""
        return await self._read(posts_all_key())

    async def set_all(self, posts: list[PostResult]) -> bool:
        """Store the global listing with the listing TTL."""
        return await self._write(posts_all_key(), posts, self.list_ttl)

    async def prepend(self, post: PostResult) -> bool:
        """Put post first in the cached listing. No-op when nothing is cached."""
        current = await self.get_all()
        if current is None:
            return False
        rest = [p for p in current if p.id != post.id]
        return await self.set_all([post, *rest])

    async def replace(self, post: PostResult) -> bool:
        """Replace the entry with post.id in place. No-op when absent."""
        current = await self.get_all()
        if current is None:
            return False
        for index, cached in enumerate(current):
            if cached.id == post.id:
                current[index] = post
                return await self.set_all(current)
        return False

    async def remove(self, post_id: str) -> bool:
        """Filter post_id out of the cached listing. No-op when nothing is cached."""
        current = await self.get_all()
        if current is None:
            return False
        return await self.set_all([p for p in current if p.id != post_id])

    async def drop_all(self) -> bool:
        """Delete the cached global listing."""
        if not self._enabled():
            return False
        return await self.cache.delete(posts_all_key())

    async def get_user_posts(self, user_id: str) -> list[PostResult] | None:
        """Return the cached own-posts view for a user or None on miss."""
        try:
            key = user_posts_key(user_id)
        except ValueError:
            logger.warning("Cannot build own-posts cache key for user %r", user_id)
            return None
        return await self._read(key)

    async def set_user_posts(self, user_id: str, posts: list[PostResult]) -> bool:
        """Store the own-posts view for a user."""
        try:
            key = user_posts_key(user_id)
        except ValueError:
            logger.warning("Cannot build own-posts cache key for user %r", user_id)
            return False
        return await self._write(key, posts, self.user_posts_ttl)

    async def invalidate_user_views(self, user_id: str) -> None:
        """Delete profile:{user_id} and posts:{user_id}."""
        if not self._enabled():
            return
        for build in (profile_key, user_posts_key):
            try:
                key = build(user_id)
            except ValueError:
                logger.warning("Cannot build %s cache key for user %r", build.__name__, user_id)
                continue
            await self.cache.delete(key)
