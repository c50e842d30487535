"""Pytest configuration and fixtures for postline.

Settings need SECRET_KEY before app.main is imported, so it is set here at
module load. Redis and Firestore are never contacted: unit tests use the
in-memory fakes below and API tests override get_post_service.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-postline-tests-only")
os.environ.setdefault("REDIS_ENABLED", "false")

from collections.abc import AsyncIterator  # noqa: E402
from dataclasses import replace  # noqa: E402
from datetime import timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import get_post_service  # noqa: E402
from app.application.dtos.asset import UploadedAsset  # noqa: E402
from app.application.dtos.category import CategoryResult  # noqa: E402
from app.application.dtos.post import AuthorSummary, PostCreate, PostRecord  # noqa: E402
from app.application.use_cases.posts import PostService  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.domain.value_objects.core import CategoryName  # noqa: E402
from app.infrastructure.cache.post_feed_cache import PostFeedCache  # noqa: E402
from app.infrastructure.security.jwt import create_access_token  # noqa: E402
from app.main import app  # noqa: E402
from app.shared.utils.datetime import utc_now  # noqa: E402
from app.shared.utils.generators import generate_cuid  # noqa: E402

LIST_TTL = 43200
USER_POSTS_TTL = 3600


class InMemoryCache:
    """Dict-backed stand-in for CacheService (same get/set/delete contract)."""

    def __init__(self) -> None:
        self.store: dict[str, Any] = {}
        self.ttls: dict[str, int] = {}
        self.available = True
        self.deleted: list[str] = []

    def is_available(self) -> bool:
        return self.available

    async def get(self, key: str) -> Any | None:
        return self.store.get(key)

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    async def delete(self, key: str) -> bool:
        self.deleted.append(key)
        self.store.pop(key, None)
        self.ttls.pop(key, None)
        return True


class InMemoryPostRepository:
    """Post store keeping insertion order; counts reads so tests can assert cache hits."""

    def __init__(self) -> None:
        self.posts: dict[str, PostRecord] = {}
        self.list_calls = 0
        self.fail_with: Exception | None = None
        self._tick = 0

    async def create_post(self, data: PostCreate) -> PostRecord:
        if self.fail_with:
            raise self.fail_with
        # Strictly increasing timestamps keep newest-first ordering deterministic.
        self._tick += 1
        now = utc_now() + timedelta(microseconds=self._tick)
        record = PostRecord(
            id=generate_cuid(),
            content=data.content,
            author_id=data.author_id,
            category_id=data.category_id,
            image=data.image,
            tags=tuple(data.tags),
            created_at=now,
            updated_at=now,
        )
        self.posts[record.id] = record
        return record

    async def get_by_id(self, post_id: str) -> PostRecord | None:
        return self.posts.get(post_id)

    async def list_posts(
        self, category_id: str | None = None, author_id: str | None = None
    ) -> list[PostRecord]:
        if self.fail_with:
            raise self.fail_with
        self.list_calls += 1
        found = [
            p
            for p in self.posts.values()
            if (category_id is None or p.category_id == category_id)
            and (author_id is None or p.author_id == author_id)
        ]
        return sorted(found, key=lambda p: p.created_at, reverse=True)

    async def update_post(self, post_id: str, fields: dict[str, Any]) -> PostRecord | None:
        current = self.posts.get(post_id)
        if current is None:
            return None
        updated = replace(current, updated_at=utc_now(), **fields)
        self.posts[post_id] = updated
        return updated

    async def delete_post(self, post_id: str) -> PostRecord | None:
        return self.posts.pop(post_id, None)


class InMemoryCategoryRepository:
    """Categories keyed by the same document id the Firestore repository derives."""

    def __init__(self) -> None:
        self.categories: dict[str, CategoryResult] = {}

    async def get_or_create(self, name: CategoryName) -> CategoryResult:
        doc_id = name.document_id
        if doc_id not in self.categories:
            self.categories[doc_id] = CategoryResult(id=doc_id, name=name.value)
        return self.categories[doc_id]

    async def get_by_id(self, category_id: str) -> CategoryResult | None:
        return self.categories.get(category_id)

    async def get_many(self, category_ids: set[str]) -> dict[str, CategoryResult]:
        return {i: self.categories[i] for i in category_ids if i in self.categories}


class InMemoryProfileRepository:
    """Author profiles; unknown users are simply absent."""

    def __init__(self) -> None:
        self.profiles: dict[str, AuthorSummary] = {
            "alice": AuthorSummary(id="alice", username="alice", fullname="Alice A"),
            "bob": AuthorSummary(id="bob", username="bob", fullname="Bob B"),
        }

    async def get_many(self, user_ids: set[str]) -> dict[str, AuthorSummary]:
        return {i: self.profiles[i] for i in user_ids if i in self.profiles}


class RecordingStorage:
    """Asset storage that records uploads and returns a fixed URL."""

    def __init__(self) -> None:
        self.uploads: list[tuple[str, str, str]] = []
        self.fail_with: Exception | None = None

    async def upload(self, file_data, filename: str, content_type: str, owner_id: str) -> UploadedAsset:
        if self.fail_with:
            raise self.fail_with
        self.uploads.append((filename, content_type, owner_id))
        ref = f"posts/{owner_id}/{filename}"
        return UploadedAsset(secure_url=f"https://cdn.test/{ref}", storage_ref=ref)


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def post_repo() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture
def category_repo() -> InMemoryCategoryRepository:
    return InMemoryCategoryRepository()


@pytest.fixture
def profile_repo() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def storage() -> RecordingStorage:
    return RecordingStorage()


@pytest.fixture
def feed_cache(cache: InMemoryCache) -> PostFeedCache:
    return PostFeedCache(cache, list_ttl=LIST_TTL, user_posts_ttl=USER_POSTS_TTL)


@pytest.fixture
def post_service(
    post_repo: InMemoryPostRepository,
    category_repo: InMemoryCategoryRepository,
    profile_repo: InMemoryProfileRepository,
    feed_cache: PostFeedCache,
    storage: RecordingStorage,
) -> PostService:
    """PostService over in-memory store, cache and storage (cache patched on write)."""
    return PostService(
        post_repo=post_repo,
        category_repo=category_repo,
        profile_repo=profile_repo,
        feed_cache=feed_cache,
        asset_storage=storage,
    )


@pytest.fixture
async def client(post_service: PostService) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) with PostService overridden."""
    app.dependency_overrides[get_post_service] = lambda: post_service
    limiter.reset()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def bearer(user_id: str) -> dict[str, str]:
    """Authorization header for user_id signed with the test secret."""
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


@pytest.fixture
def alice_headers() -> dict[str, str]:
    return bearer("alice")


@pytest.fixture
def bob_headers() -> dict[str, str]:
    return bearer("bob")
