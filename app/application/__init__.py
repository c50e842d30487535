"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, cache, storage).
"""

from app.application.interfaces import (
    IAssetStorage,
    ICacheService,
    ICategoryRepository,
    IPostFeedCache,
    IPostRepository,
    IUserProfileRepository,
)
from app.application.use_cases.posts import PostService

__all__ = [
    "IAssetStorage",
    "ICacheService",
    "ICategoryRepository",
    "IPostFeedCache",
    "IPostRepository",
    "IUserProfileRepository",
    "PostService",
]
