"""Domain value objects (immutable, self-validating)."""

from app.domain.value_objects.core import (
    CategoryName,
    PostContent,
    UserId,
    is_valid_id,
)

__all__ = [
    "CategoryName",
    "PostContent",
    "UserId",
    "is_valid_id",
]
