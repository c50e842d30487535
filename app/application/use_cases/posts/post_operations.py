"""Post operations: list, create, update, delete, and lookups.

PostService is the only place that decides how the post feed cache follows
store writes. Reads of the global listing go through the cache (read-through);
every write patches (or drops) posts:all and then invalidates the author's
profile and own-posts views.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable

from app.application.dtos.asset import AssetUpload
from app.application.dtos.post import (
    AuthorSummary,
    CategorySummary,
    PostCreate,
    PostRecord,
    PostResult,
)
from app.application.interfaces.repositories import (
    ICategoryRepository,
    IPostRepository,
    IUserProfileRepository,
)
from app.application.interfaces.services import IPostFeedCache
from app.application.interfaces.storage import IAssetStorage
from app.domain.entities.post import decide_post_mutation
from app.domain.enums import MutationDecision, PostAction
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.core import (
    CategoryName,
    PostContent,
    UserId,
    is_valid_id,
)

logger = logging.getLogger(__name__)


def _require_identity(caller_id: str | None) -> UserId:
    """Return the caller as UserId; raise AuthenticationException when absent or unusable."""
    if caller_id is None:
        raise AuthenticationException()
    try:
        return UserId(str(caller_id))
    except ValueError as e:
        raise AuthenticationException() from e


def _clean_tags(tags: Iterable[str] | None) -> tuple[str, ...]:
    """Trim tags and drop empty ones, keeping order."""
    if not tags:
        return ()
    return tuple(t.strip() for t in tags if t and t.strip())


def _enforce(decision: MutationDecision, post_id: str, action: PostAction) -> None:
    """Guard clause: stop unless the ownership decision allows the mutation."""
    if decision is MutationDecision.ALLOWED:
        return
    if decision is MutationDecision.NOT_FOUND:
        raise ResourceNotFoundException("post", post_id)
    raise AuthorizationException(resource="post", action=action.value)


class PostService:
    """Create, update, delete and query posts with a coherent feed cache.

    Args:
        post_repo: Content store for posts.
        category_repo: Content store for categories (get-or-create by name).
        profile_repo: Author display fields.
        feed_cache: Typed cache for posts:all and per-user views.
        asset_storage: Image uploader; None disables image uploads.
        patch_cache_on_write: Patch posts:all on writes (True) or drop it so
            the next listing repopulates from the store (False).
    """

    def __init__(
        self,
        post_repo: IPostRepository,
        category_repo: ICategoryRepository,
        profile_repo: IUserProfileRepository,
        feed_cache: IPostFeedCache,
        asset_storage: IAssetStorage | None = None,
        patch_cache_on_write: bool = True,
    ) -> None:
        self.post_repo = post_repo
        self.category_repo = category_repo
        self.profile_repo = profile_repo
        self.feed_cache = feed_cache
        self.asset_storage = asset_storage
        self.patch_cache_on_write = patch_cache_on_write

    # ---- Read path ----

    async def list_all_posts(self) -> list[PostResult]:
        """Return every post, newest first. Served from posts:all when cached."""
        cached = await self.feed_cache.get_all()
        if cached is not None:
            return cached
        records = await self.post_repo.list_posts()
        posts = await self._resolve(records)
        await self.feed_cache.set_all(posts)
        return posts

    async def get_post(self, post_id: str) -> PostResult:
        """Return one post from the store (never cached); 404 when missing."""
        record = await self.post_repo.get_by_id(post_id) if is_valid_id(post_id) else None
        if record is None:
            raise ResourceNotFoundException("post", post_id)
        return (await self._resolve([record]))[0]

    async def list_posts_by_category(self, category_id: str) -> list[PostResult]:
        """Return posts in a category from the store; 404 when the category is unknown."""
        category = await self.category_repo.get_by_id(category_id)
        if category is None:
            raise ResourceNotFoundException("category", category_id)
        records = await self.post_repo.list_posts(category_id=category.id)
        return await self._resolve(records)

    async def list_posts_by_author(self, user_id: str) -> list[PostResult]:
        """Return a user's own posts, newest first. Read-through on posts:{user_id}."""
        try:
            author = UserId(user_id)
        except ValueError as e:
            raise ValidationException(str(e), field="user_id") from e
        cached = await self.feed_cache.get_user_posts(author.value)
        if cached is not None:
            return cached
        records = await self.post_repo.list_posts(author_id=author.value)
        posts = await self._resolve(records)
        await self.feed_cache.set_user_posts(author.value, posts)
        return posts

    # ---- Write path ----

    async def create_post(
        self,
        caller_id: str | None,
        content: str,
        category: str,
        tags: Iterable[str] | None = None,
        image: AssetUpload | None = None,
    ) -> PostResult:
        """Create a post authored by the caller.

        Resolves (or creates) the category, uploads the image when given,
        persists the post, then puts it first in the cached listing.

        Raises:
            AuthenticationException: No caller identity.
            ValidationException: Empty content or category; image without storage.
            StorageUploadError: Image upload failed (nothing persisted).
        """
        author = _require_identity(caller_id)
        try:
            body = PostContent(content)
        except ValueError as e:
            raise ValidationException(str(e), field="content") from e
        try:
            category_name = CategoryName(category)
        except ValueError as e:
            raise ValidationException(str(e), field="category") from e

        category_result = await self.category_repo.get_or_create(category_name)

        image_url: str | None = None
        if image is not None:
            if self.asset_storage is None:
                raise ValidationException("Image uploads are not enabled", field="image")
            uploaded = await self.asset_storage.upload(
                image.file_data,
                image.filename,
                image.content_type,
                owner_id=author.value,
            )
            image_url = uploaded.secure_url

        record = await self.post_repo.create_post(
            PostCreate(
                content=body.value,
                author_id=author.value,
                category_id=category_result.id,
                image=image_url,
                tags=_clean_tags(tags),
            )
        )
        post = (await self._resolve([record]))[0]
        logger.info("Post created: %s by %s", post.id, author)

        await self._sync_feed(author, lambda: self.feed_cache.prepend(post))
        return post

    async def update_post(
        self, caller_id: str | None, post_id: str, content: str
    ) -> PostResult:
        """Update a post's content. Only the author may update.

        Author and category never change. The cached listing entry is replaced
        in place.

        Raises:
            AuthenticationException: No caller identity.
            ValidationException: Empty content.
            ResourceNotFoundException: Post does not exist.
            AuthorizationException: Caller is not the author.
        """
        caller = _require_identity(caller_id)
        try:
            body = PostContent(content)
        except ValueError as e:
            raise ValidationException(str(e), field="content") from e

        existing = await self.post_repo.get_by_id(post_id) if is_valid_id(post_id) else None
        _enforce(
            decide_post_mutation(UserId(existing.author_id) if existing else None, caller),
            post_id,
            PostAction.UPDATE,
        )

        updated = await self.post_repo.update_post(post_id, {"content": body.value})
        if updated is None:
            raise ResourceNotFoundException("post", post_id)
        post = (await self._resolve([updated]))[0]
        logger.info("Post updated: %s by %s", post_id, caller)

        await self._sync_feed(caller, lambda: self.feed_cache.replace(post))
        return post

    async def delete_post(self, caller_id: str | None, post_id: str) -> str:
        """Delete a post. Only the author may delete. Returns the deleted id.

        Raises:
            AuthenticationException: No caller identity.
            ValidationException: post_id is not a valid identifier.
            ResourceNotFoundException: Post does not exist.
            AuthorizationException: Caller is not the author.
        """
        caller = _require_identity(caller_id)
        if not is_valid_id(post_id):
            raise ValidationException("Invalid post ID", field="id")

        existing = await self.post_repo.get_by_id(post_id)
        _enforce(
            decide_post_mutation(UserId(existing.author_id) if existing else None, caller),
            post_id,
            PostAction.DELETE,
        )

        deleted = await self.post_repo.delete_post(post_id)
        if deleted is None:
            raise ResourceNotFoundException("post", post_id)
        logger.info("Post deleted: %s by %s", post_id, caller)

        await self._sync_feed(caller, lambda: self.feed_cache.remove(post_id))
        return post_id

    # ---- Helpers ----

    async def _sync_feed(
        self, author: UserId, patch: Callable[[], Awaitable[bool]]
    ) -> None:
        """Bring posts:all in line with a write, then drop the author's derived views."""
        if self.patch_cache_on_write:
            await patch()
        else:
            await self.feed_cache.drop_all()
        await self.feed_cache.invalidate_user_views(author.value)

    async def _resolve(self, records: list[PostRecord]) -> list[PostResult]:
        """Join author and category display fields onto stored posts (order kept)."""
        if not records:
            return []
        authors, categories = await asyncio.gather(
            self.profile_repo.get_many({r.author_id for r in records}),
            self.category_repo.get_many({r.category_id for r in records}),
        )
        return [
            PostResult(
                id=r.id,
                content=r.content,
                author=authors.get(r.author_id) or AuthorSummary(id=r.author_id),
                category=(
                    CategorySummary(id=c.id, name=c.name)
                    if (c := categories.get(r.category_id))
                    else CategorySummary(id=r.category_id, name="")
                ),
                image=r.image,
                tags=r.tags,
                created_at=r.created_at,
                updated_at=r.updated_at,
            )
            for r in records
        ]
