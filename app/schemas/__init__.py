"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.post import (
    CategoryPostsResponse,
    PostDataResponse,
    PostDeleteResponse,
    PostListResponse,
    PostResponse,
    PostUpdateRequest,
    SinglePostResponse,
)

__all__ = [
    "CategoryPostsResponse",
    "HealthResponse",
    "PostDataResponse",
    "PostDeleteResponse",
    "PostListResponse",
    "PostResponse",
    "PostUpdateRequest",
    "ReadinessResponse",
    "SinglePostResponse",
]
