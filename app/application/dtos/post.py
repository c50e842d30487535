"""DTOs for post use cases (no dependency on the store client)."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class AuthorSummary:
    """Author display fields resolved onto a post (username, fullname, picture)."""

    id: str
    username: str = ""
    fullname: str = ""
    profile_picture: str | None = None


@dataclass(frozen=True)
class CategorySummary:
    """Category fields resolved onto a post."""

    id: str
    name: str


@dataclass(frozen=True)
class PostRecord:
    """Post as stored: references only, nothing resolved."""

    id: str
    content: str
    author_id: str
    category_id: str
    image: str | None
    tags: tuple[str, ...]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class PostCreate:
    """Fields for a new post. Content is already trimmed and validated."""

    content: str
    author_id: str
    category_id: str
    image: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PostResult:
    """Post read-model with author and category resolved.

    This is the shape returned by listings and stored in the post feed cache.
    """

    id: str
    content: str
    author: AuthorSummary
    category: CategorySummary
    image: str | None
    tags: tuple[str, ...]
    created_at: datetime
    updated_at: datetime
