"""Firestore-backed post repository (implements IPostRepository)."""

from __future__ import annotations

from typing import Any

from app.application.dtos.post import PostCreate, PostRecord
from app.infrastructure.firebase._rest_client import (
    DESCENDING,
    FirestoreRESTClient,
)
from app.infrastructure.firebase.collections import COLLECTION_POSTS
from app.shared.utils.datetime import ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid

# Author and category are fixed at creation.
_UPDATABLE_FIELDS = frozenset({"content", "image", "tags"})


class FirestorePostRepository:
    """Post repository using Firestore."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_POSTS)

    def _to_record(self, doc_id: str, data: dict[str, Any]) -> PostRecord:
        created_at = ensure_utc(data.get("created_at")) or utc_now()
        return PostRecord(
            id=doc_id,
            content=data.get("content", ""),
            author_id=data.get("author_id", ""),
            category_id=data.get("category_id", ""),
            image=data.get("image"),
            tags=tuple(data.get("tags") or ()),
            created_at=created_at,
            updated_at=ensure_utc(data.get("updated_at")) or created_at,
        )

    async def create_post(self, data: PostCreate) -> PostRecord:
        """Create post with a new CUID; return the stored record."""
        post_id = generate_cuid()
        now = utc_now()
        fields = {
            "content": data.content,
            "author_id": data.author_id,
            "category_id": data.category_id,
            "image": data.image,
            "tags": list(data.tags),
            "created_at": now,
            "updated_at": now,
        }
        await self._coll.create(post_id, fields)
        return self._to_record(post_id, fields)

    async def get_by_id(self, post_id: str) -> PostRecord | None:
        """Return post by ID."""
        doc = await self._coll.document(post_id).get()
        if not doc:
            return None
        return self._to_record(doc.id, doc.to_dict())

    async def list_posts(
        self,
        category_id: str | None = None,
        author_id: str | None = None,
    ) -> list[PostRecord]:
        """Return posts newest first, optionally filtered by category and/or author."""
        q = self._coll.order_by("created_at", DESCENDING)
        if category_id is not None:
            q = q.where("category_id", "==", category_id)
        if author_id is not None:
            q = q.where("author_id", "==", author_id)
        return [self._to_record(s.id, s.to_dict()) async for s in q.stream()]

    async def update_post(
        self, post_id: str, fields: dict[str, Any]
    ) -> PostRecord | None:
        """Write the updatable subset of fields; return updated post or None if missing."""
        updates = {k: v for k, v in fields.items() if k in _UPDATABLE_FIELDS}
        if "tags" in updates:
            updates["tags"] = list(updates["tags"])
        updates["updated_at"] = utc_now()
        doc = await self._coll.document(post_id).update(updates)
        if not doc:
            return None
        return self._to_record(post_id, doc.to_dict())

    async def delete_post(self, post_id: str) -> PostRecord | None:
        """Delete post; return the deleted record or None if it did not exist."""
        doc_ref = self._coll.document(post_id)
        doc = await doc_ref.get()
        if not doc:
            return None
        await doc_ref.delete()
        return self._to_record(doc.id, doc.to_dict())
