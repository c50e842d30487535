"""Firestore-backed author profile reads (implements IUserProfileRepository)."""

from __future__ import annotations

import asyncio

from app.application.dtos.post import AuthorSummary
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.collections import COLLECTION_USERS


class FirestoreUserProfileRepository:
    """Reads username, fullname and profile picture from the users collection."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_USERS)

    async def _get(self, user_id: str) -> AuthorSummary | None:
        if not user_id or "/" in user_id:
            return None
        doc = await self._coll.document(user_id).get()
        if not doc:
            return None
        d = doc.to_dict()
        return AuthorSummary(
            id=doc.id,
            username=d.get("username", ""),
            fullname=d.get("fullname", ""),
            profile_picture=d.get("profile_picture"),
        )

    async def get_many(self, user_ids: set[str]) -> dict[str, AuthorSummary]:
        """Return author summaries by user ID (concurrent point reads)."""
        ids = sorted(user_ids)
        found = await asyncio.gather(*(self._get(i) for i in ids))
        return {i: a for i, a in zip(ids, found) if a is not None}
