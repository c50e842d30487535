"""Firestore-backed repository implementations."""

from app.infrastructure.firebase.repositories.category_repo_firestore import (
    FirestoreCategoryRepository,
)
from app.infrastructure.firebase.repositories.post_repo_firestore import (
    FirestorePostRepository,
)
from app.infrastructure.firebase.repositories.user_repo_firestore import (
    FirestoreUserProfileRepository,
)

__all__ = [
    "FirestoreCategoryRepository",
    "FirestorePostRepository",
    "FirestoreUserProfileRepository",
]
