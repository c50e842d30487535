"""Cache key builders. Single place for key format (DRY).

Key components (user_id etc.) must not contain CACHE_KEY_SEP to avoid
ambiguous or colliding keys. The scheme is shared with other services
reading the same Redis, so it must stay bit-exact:

    posts:all           global post listing
    profile:{user_id}   a user's profile view
    posts:{user_id}     a user's own posts
"""

from app.core.constants import (
    CACHE_KEY_SEP,
    CACHE_POSTS_ALL,
    CACHE_PREFIX_POSTS,
    CACHE_PREFIX_PROFILE,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must be non-empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def posts_all_key() -> str:
    """Cache key for the global post listing."""
    return f"{CACHE_PREFIX_POSTS}{CACHE_KEY_SEP}{CACHE_POSTS_ALL}"


def profile_key(user_id: str) -> str:
    """Cache key for a user's profile view."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_PROFILE}{CACHE_KEY_SEP}{user_id}"


def user_posts_key(user_id: str) -> str:
    """Cache key for a user's own posts."""
    _validate_key_component(user_id, "user_id")
    if user_id == CACHE_POSTS_ALL:
        raise ValueError(
            f"Cache key component 'user_id' must not be {CACHE_POSTS_ALL!r}"
        )
    return f"{CACHE_PREFIX_POSTS}{CACHE_KEY_SEP}{user_id}"
