"""Unit tests for the post feed cache codec and list patching."""

from datetime import UTC, datetime

import pytest

from app.application.dtos.post import AuthorSummary, CategorySummary, PostResult
from app.infrastructure.cache.post_feed_cache import (
    PostFeedCache,
    decode_feed,
    decode_post,
    encode_feed,
    encode_post,
)


def _post(post_id: str, content: str = "hi") -> PostResult:
    ts = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    return PostResult(
        id=post_id,
        content=content,
        author=AuthorSummary(id="alice", username="alice", fullname="Alice A", profile_picture="https://p/a.png"),
        category=CategorySummary(id="tech", name="tech"),
        image=None,
        tags=("x",),
        created_at=ts,
        updated_at=ts,
    )


class TestCodec:
    def test_encode_uses_api_field_names(self) -> None:
        data = encode_post(_post("abc"))
        assert set(data) == {
            "id", "content", "author", "image", "tags", "category", "createdAt", "updatedAt",
        }
        assert data["author"]["profilePicture"] == "https://p/a.png"
        assert data["createdAt"] == "2024-05-01T12:00:00+00:00"

    def test_decode_restores_post(self) -> None:
        post = _post("abc")
        assert decode_post(encode_post(post)) == post

    def test_envelope_has_version(self) -> None:
        assert encode_feed([]) == {"version": 1, "items": []}

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            [],
            {"items": []},
            {"version": 2, "items": []},
            {"version": 1, "items": "nope"},
            {"version": 1, "items": [{"id": "x"}]},
        ],
    )
    def test_unreadable_envelopes_decode_to_none(self, raw) -> None:
        assert decode_feed(raw) is None


class TestPatching:
    async def test_prepend_dedupes(self, feed_cache: PostFeedCache) -> None:
        await feed_cache.set_all([_post("b"), _post("a")])
        assert await feed_cache.prepend(_post("a", "again")) is True
        posts = await feed_cache.get_all()
        assert [p.id for p in posts] == ["a", "b"]
        assert posts[0].content == "again"

    async def test_prepend_without_listing_is_noop(self, feed_cache: PostFeedCache, cache) -> None:
        assert await feed_cache.prepend(_post("a")) is False
        assert cache.store == {}

    async def test_replace_absent_is_noop(self, feed_cache: PostFeedCache, cache) -> None:
        await feed_cache.set_all([_post("a")])
        cache.ttls.clear()
        assert await feed_cache.replace(_post("zzz")) is False
        assert cache.ttls == {}

    async def test_remove_rewrites_with_full_ttl(self, feed_cache: PostFeedCache, cache) -> None:
        await feed_cache.set_all([_post("a"), _post("b")])
        cache.ttls["posts:all"] = 1
        await feed_cache.remove("a")
        assert [p.id for p in await feed_cache.get_all()] == ["b"]
        assert cache.ttls["posts:all"] == 43200

    async def test_disabled_cache_is_silent(self) -> None:
        feed = PostFeedCache(None, list_ttl=10, user_posts_ttl=10)
        assert await feed.get_all() is None
        assert await feed.set_all([_post("a")]) is False
        assert await feed.drop_all() is False
        await feed.invalidate_user_views("alice")

    async def test_bad_user_id_is_ignored(self, feed_cache: PostFeedCache, cache) -> None:
        """Ids that would collide with other keys never reach Redis."""
        assert await feed_cache.set_user_posts("all", []) is False
        assert await feed_cache.get_user_posts("a:b") is None
        await feed_cache.invalidate_user_views("a:b")
        assert cache.store == {}
        assert cache.deleted == []

    async def test_invalidation_keys_are_independent(self, feed_cache: PostFeedCache, cache) -> None:
        """A user named "all" still loses its profile view; posts:all is untouched."""
        await feed_cache.set_all([_post("a")])
        cache.store["profile:all"] = {"username": "all"}

        await feed_cache.invalidate_user_views("all")

        assert cache.deleted == ["profile:all"]
        assert "posts:all" in cache.store
