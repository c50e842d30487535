"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.category import CategoryResult
    from app.application.dtos.post import AuthorSummary, PostCreate, PostRecord
    from app.domain.value_objects.core import CategoryName


# Post repository interface
class IPostRepository(Protocol):
    """Protocol for post persistence (DIP)."""

    async def create_post(self, data: PostCreate) -> PostRecord:
        """Persist a new post; the store assigns id and timestamps."""

    async def get_by_id(self, post_id: str) -> PostRecord | None:
        """Return post by ID."""

    async def list_posts(
        self,
        category_id: str | None = None,
        author_id: str | None = None,
    ) -> list[PostRecord]:
        """Return posts (optionally filtered), newest first by created_at."""

    async def update_post(
        self, post_id: str, fields: dict[str, Any]
    ) -> PostRecord | None:
        """Apply fields to the post; return the updated post or None if missing."""

    async def delete_post(self, post_id: str) -> PostRecord | None:
        """Delete the post; return what was deleted or None if missing."""


# Category repository interface
class ICategoryRepository(Protocol):
    """Protocol for category persistence (get-or-create by name)."""

    async def get_or_create(self, name: CategoryName) -> CategoryResult:
        """Return the category with this name, creating it if absent."""

    async def get_by_id(self, category_id: str) -> CategoryResult | None:
        """Return category by ID."""

    async def get_many(self, category_ids: set[str]) -> dict[str, CategoryResult]:
        """Return categories by ID (batch). Missing IDs are absent from the dict."""


# User profile repository interface
class IUserProfileRepository(Protocol):
    """Protocol for reading author display fields."""

    async def get_many(self, user_ids: set[str]) -> dict[str, AuthorSummary]:
        """Return author summaries by user ID (batch). Missing IDs are absent."""
