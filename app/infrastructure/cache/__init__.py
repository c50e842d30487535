"""Cache: Redis service, cache key utilities, and the post feed cache.

CacheService uses app.core.config; key format is in keys.py (DRY);
PostFeedCache owns the cached post list layout.
"""

from app.infrastructure.cache.keys import posts_all_key, profile_key, user_posts_key
from app.infrastructure.cache.post_feed_cache import (
    PostFeedCache,
    decode_post,
    encode_post,
)
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "PostFeedCache",
    "decode_post",
    "encode_post",
    "posts_all_key",
    "profile_key",
    "user_posts_key",
]
