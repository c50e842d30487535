"""Service interfaces (ports) for the application layer.

Protocols define contracts for caches and other services (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.post import PostResult


# Cache service interface
class ICacheService(Protocol):
    """Minimal key-value cache protocol (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""


# Post feed cache interface
class IPostFeedCache(Protocol):
    """Typed view over the cache for post listings and per-user views.

    Every method tolerates cache failures: reads return None, writes return
    False. Nothing here raises because of the cache.
    """

    async def get_all(self) -> list[PostResult] | None:
        """Return the cached global listing (posts:all) or None on miss."""

    async def set_all(self, posts: list[PostResult]) -> bool:
        """Store the global listing with the listing TTL."""

    async def prepend(self, post: PostResult) -> bool:
        """Put post first in the cached listing if the listing is cached."""

    async def replace(self, post: PostResult) -> bool:
        """Replace the cached entry with the same id, keeping its position."""

    async def remove(self, post_id: str) -> bool:
        """Drop the cached entry with this id if the listing is cached."""

    async def drop_all(self) -> bool:
        """Delete the cached global listing."""

    async def get_user_posts(self, user_id: str) -> list[PostResult] | None:
        """Return the cached own-posts view for a user or None on miss."""

    async def set_user_posts(self, user_id: str, posts: list[PostResult]) -> bool:
        """Store the own-posts view for a user."""

    async def invalidate_user_views(self, user_id: str) -> None:
        """Delete the profile and own-posts entries for a user."""
