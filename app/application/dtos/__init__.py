"""Application DTOs (no store or ORM dependency)."""

from app.application.dtos.asset import AssetUpload, UploadedAsset
from app.application.dtos.category import CategoryResult
from app.application.dtos.post import (
    AuthorSummary,
    CategorySummary,
    PostCreate,
    PostRecord,
    PostResult,
)

__all__ = [
    "AssetUpload",
    "AuthorSummary",
    "CategoryResult",
    "CategorySummary",
    "PostCreate",
    "PostRecord",
    "PostResult",
    "UploadedAsset",
]
