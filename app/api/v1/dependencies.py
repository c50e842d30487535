"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the caller identity and PostService. The
service is built from infrastructure held on app.state by the lifespan
(Firestore client, Redis cache, asset storage); routes depend only on these
dependencies, not on infra directly. Tests override get_post_service.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.use_cases.posts import PostService
from app.core.config import get_settings
from app.domain.exceptions import AuthenticationException, StoreUnavailableException
from app.infrastructure.cache import PostFeedCache
from app.infrastructure.firebase._rest_client import FirestoreRESTClient
from app.infrastructure.firebase.repositories import (
    FirestoreCategoryRepository,
    FirestorePostRepository,
    FirestoreUserProfileRepository,
)
from app.infrastructure.security.jwt import verify_token

logger = logging.getLogger(__name__)

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user_id_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str | None:
    """Return the caller's user id (JWT sub) if a valid token is present; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError as e:
        logger.debug("Rejected bearer token: %s", e)
        return None
    return payload["sub"]


async def get_current_user_id(
    user_id: Annotated[str | None, Depends(get_current_user_id_optional)],
) -> str:
    """Return the caller's user id; raise 401 if missing or invalid."""
    if user_id is None:
        raise AuthenticationException()
    return user_id


def get_firestore(request: Request) -> FirestoreRESTClient:
    """Return the Firestore client from app.state; 503 when not configured."""
    client = getattr(request.app.state, "firestore", None)
    if client is None:
        raise StoreUnavailableException("connect")
    return client


def get_feed_cache(request: Request) -> PostFeedCache:
    """Post feed cache over the app's Redis CacheService (or no cache)."""
    settings = get_settings()
    return PostFeedCache(
        getattr(request.app.state, "cache", None),
        list_ttl=settings.cache_ttl_posts,
        user_posts_ttl=settings.cache_ttl_user_posts,
    )


def get_post_service(
    request: Request,
    client: Annotated[FirestoreRESTClient, Depends(get_firestore)],
    feed_cache: Annotated[PostFeedCache, Depends(get_feed_cache)],
) -> PostService:
    """PostService wired to Firestore, the feed cache and asset storage."""
    return PostService(
        post_repo=FirestorePostRepository(client),
        category_repo=FirestoreCategoryRepository(client),
        profile_repo=FirestoreUserProfileRepository(client),
        feed_cache=feed_cache,
        asset_storage=getattr(request.app.state, "asset_storage", None),
        patch_cache_on_write=get_settings().posts_cache_patch_on_write,
    )
