"""Application interfaces (ports): repository, cache, and storage protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    ICategoryRepository,
    IPostRepository,
    IUserProfileRepository,
)
from app.application.interfaces.services import ICacheService, IPostFeedCache
from app.application.interfaces.storage import IAssetStorage

__all__ = [
    "IAssetStorage",
    "ICacheService",
    "ICategoryRepository",
    "IPostFeedCache",
    "IPostRepository",
    "IUserProfileRepository",
]
