"""Drop and rebuild the cached global post listing (posts:all).

Use after changing the cached post shape or when the listing is known to be
stale. Reads every post from Firestore, so run it off-peak.

Usage:
    python -m scripts.rebuild_post_cache
"""

import asyncio
import sys

from app.application.use_cases.posts import PostService
from app.core.config import get_settings
from app.infrastructure.cache import CacheService, PostFeedCache
from app.infrastructure.firebase.client import close_firebase, get_firestore_client, init_firebase
from app.infrastructure.firebase.repositories import (
    FirestoreCategoryRepository,
    FirestorePostRepository,
    FirestoreUserProfileRepository,
)
from app.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Rebuild posts:all from the store."""
    setup_logging()
    settings = get_settings()
    if not init_firebase():
        print("Firestore is not configured", file=sys.stderr)
        sys.exit(1)
    cache = CacheService()
    await cache.connect()
    if not cache.is_available():
        print("Redis is not reachable", file=sys.stderr)
        await close_firebase()
        sys.exit(1)
    try:
        client = get_firestore_client()
        feed = PostFeedCache(cache, settings.cache_ttl_posts, settings.cache_ttl_user_posts)
        svc = PostService(
            post_repo=FirestorePostRepository(client),
            category_repo=FirestoreCategoryRepository(client),
            profile_repo=FirestoreUserProfileRepository(client),
            feed_cache=feed,
        )
        await feed.drop_all()
        posts = await svc.list_all_posts()
        print(f"Rebuilt posts:all with {len(posts)} posts")
    finally:
        await cache.disconnect()
        await close_firebase()


if __name__ == "__main__":
    asyncio.run(main())
