"""Domain value objects for the Postline application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import hashlib
import re
from dataclasses import dataclass
from typing import ClassVar

# CUID2-shaped identifiers: lowercase, starts with a letter, 2-32 chars.
_ID_RE = re.compile(r"^[a-z][a-z0-9]{1,31}$")


def is_valid_id(value: str | None) -> bool:
    """Return True if value is a syntactically valid post identifier."""
    return bool(value) and bool(_ID_RE.match(value))


@dataclass(frozen=True)
class UserId:
    """Value object for an authenticated user's identifier.

    Ownership checks compare UserId instances, never raw strings, so a
    caller id and a stored author id only match when both normalize to the
    same value.

    User ids are cache key components, so they may not contain ":".
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("UserId value must be a string")
        stripped = self.value.strip()
        if not stripped:
            raise ValueError("UserId must be a non-empty string")
        if ":" in stripped:
            raise ValueError("UserId must not contain ':'")
        if stripped != self.value:
            object.__setattr__(self, "value", stripped)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PostContent:
    """Value object for post body text: trimmed and non-empty."""

    MAX_LENGTH: ClassVar[int] = 10_000

    value: str

    def __post_init__(self) -> None:
        trimmed = (self.value or "").strip()
        if not trimmed:
            raise ValueError("Content should have at least 1 character")
        if len(trimmed) > self.MAX_LENGTH:
            raise ValueError(
                f"Content must be at most {self.MAX_LENGTH} characters"
            )
        object.__setattr__(self, "value", trimmed)


@dataclass(frozen=True)
class CategoryName:
    """Value object for a category name (unique key for get-or-create)."""

    MAX_LENGTH: ClassVar[int] = 100

    value: str

    def __post_init__(self) -> None:
        trimmed = (self.value or "").strip()
        if not trimmed:
            raise ValueError("Category is required")
        if len(trimmed) > self.MAX_LENGTH:
            raise ValueError(
                f"Category must be at most {self.MAX_LENGTH} characters"
            )
        object.__setattr__(self, "value", trimmed)

    @property
    def document_id(self) -> str:
        """Store document ID: sha256 hex of the trimmed name.

        Distinct names never share an ID, and the hex form is always a legal
        Firestore ID (no "/", no ".", never "__x__").
        """
        return hashlib.sha256(self.value.encode("utf-8")).hexdigest()
