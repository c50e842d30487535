"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY). Used by
app.infrastructure.cache.keys and the post feed cache.
"""

# Cache key prefixes
CACHE_PREFIX_POSTS = "posts"
CACHE_PREFIX_PROFILE = "profile"

# Suffix of the global post listing key (posts:all)
CACHE_POSTS_ALL = "all"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Envelope version of the cached post list; bump when the item shape changes.
POST_FEED_CACHE_VERSION = 1
