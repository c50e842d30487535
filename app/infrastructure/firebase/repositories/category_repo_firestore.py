"""Firestore-backed category repository (implements ICategoryRepository)."""

from __future__ import annotations

import asyncio
import logging

from app.application.dtos.category import CategoryResult
from app.domain.value_objects.core import CategoryName
from app.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    FirestoreRESTClient,
)
from app.infrastructure.firebase.collections import COLLECTION_CATEGORIES
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class FirestoreCategoryRepository:
    """Category repository using Firestore.

    The document ID is the sha256 of the category name, so create-if-absent
    in the store makes get-or-create atomic: two requests creating the same
    new name end up with one document.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_CATEGORIES)

    async def get_or_create(self, name: CategoryName) -> CategoryResult:
        """Return category by name; create it on first use."""
        doc_id = name.document_id
        existing = await self.get_by_id(doc_id)
        if existing:
            return existing
        try:
            await self._coll.create(doc_id, {"name": name.value, "created_at": utc_now()})
            logger.info("Category created: %s", name.value)
        except DocumentExistsError:
            # Lost the race to a concurrent creator; theirs is the category.
            found = await self.get_by_id(doc_id)
            if found:
                return found
        return CategoryResult(id=doc_id, name=name.value)

    async def get_by_id(self, category_id: str) -> CategoryResult | None:
        """Return category by ID."""
        if not category_id or "/" in category_id:
            return None
        doc = await self._coll.document(category_id).get()
        if not doc:
            return None
        return CategoryResult(id=doc.id, name=doc.to_dict().get("name", ""))

    async def get_many(self, category_ids: set[str]) -> dict[str, CategoryResult]:
        """Return categories by ID (concurrent point reads)."""
        ids = sorted(category_ids)
        found = await asyncio.gather(*(self.get_by_id(i) for i in ids))
        return {i: c for i, c in zip(ids, found) if c is not None}
