"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when you first write a document. Use these constants so collection names
stay consistent and act as the single source of truth for the "schema".

Example:
    from app.infrastructure.firebase.client import get_firestore_client
    from app.infrastructure.firebase.collections import COLLECTION_POSTS

    db = get_firestore_client()
    if db:
        snapshot = await db.collection(COLLECTION_POSTS).document(post_id).get()
"""

COLLECTION_POSTS = "posts"
COLLECTION_CATEGORIES = "categories"
# Written by the auth/profile service; read here for author display fields.
COLLECTION_USERS = "users"
