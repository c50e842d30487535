"""Post API: thin routes delegating to PostService.

Domain exceptions raised by the service are turned into the error body by
app.core.exception_handlers; routes only shape success responses.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from app.api.v1.dependencies import get_current_user_id, get_post_service
from app.application.dtos.asset import AssetUpload
from app.application.use_cases.posts import PostService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.post import (
    CategoryPostsResponse,
    PostDataResponse,
    PostDeleteResponse,
    PostListResponse,
    PostResponse,
    PostUpdateRequest,
    SinglePostResponse,
)

router = APIRouter()

PostServiceDep = Annotated[PostService, Depends(get_post_service)]
CallerDep = Annotated[str, Depends(get_current_user_id)]


@router.get("", response_model=PostListResponse)
async def list_posts(post_svc: PostServiceDep):
    """Return all posts, newest first (served from the feed cache when warm)."""
    posts = await post_svc.list_all_posts()
    return PostListResponse(
        data=[PostResponse.from_result(p) for p in posts],
        message="All posts retrieved successfully",
    )


@router.post("", response_model=PostDataResponse, status_code=201)
@limit_upload
async def create_post(
    request: Request,
    caller_id: CallerDep,
    post_svc: PostServiceDep,
    content: Annotated[str, Form()] = "",
    category: Annotated[str, Form()] = "",
    tags: Annotated[list[str] | None, Form()] = None,
    image: Annotated[UploadFile | None, File()] = None,
):
    """Create a post (multipart: content, category, repeatable tags, optional image)."""
    upload = None
    if image is not None and image.filename:
        upload = AssetUpload(
            file_data=image.file,
            filename=image.filename,
            content_type=image.content_type or "application/octet-stream",
        )
    post = await post_svc.create_post(
        caller_id,
        content=content,
        category=category,
        tags=tags,
        image=upload,
    )
    return PostDataResponse(
        data=PostResponse.from_result(post),
        message="Post created successfully",
    )


@router.get("/category/{category_id}", response_model=CategoryPostsResponse)
async def list_posts_by_category(category_id: str, post_svc: PostServiceDep):
    """Return posts in a category; 404 if the category does not exist."""
    posts = await post_svc.list_posts_by_category(category_id)
    return CategoryPostsResponse(
        data={"posts": [PostResponse.from_result(p) for p in posts]},
        message="Posts retrieved successfully",
    )


@router.get("/user/{user_id}", response_model=PostListResponse)
async def list_posts_by_user(user_id: str, post_svc: PostServiceDep):
    """Return one user's posts, newest first."""
    posts = await post_svc.list_posts_by_author(user_id)
    return PostListResponse(
        data=[PostResponse.from_result(p) for p in posts],
        message="Posts retrieved successfully",
    )


@router.get("/{post_id}", response_model=SinglePostResponse)
async def get_post(post_id: str, post_svc: PostServiceDep):
    """Return one post by id (always read from the store)."""
    post = await post_svc.get_post(post_id)
    return SinglePostResponse(
        data={"post": PostResponse.from_result(post)},
        message="Posts retrieved successfully",
    )


@router.put("/{post_id}", response_model=SinglePostResponse)
@limit_writes
async def update_post(
    request: Request,
    post_id: str,
    body: PostUpdateRequest,
    caller_id: CallerDep,
    post_svc: PostServiceDep,
):
    """Replace a post's content. Only the author may update."""
    post = await post_svc.update_post(caller_id, post_id, body.content)
    return SinglePostResponse(
        data={"post": PostResponse.from_result(post)},
        message="Post updated successfully",
    )


@router.delete("/{post_id}", response_model=PostDeleteResponse)
@limit_writes
async def delete_post(
    request: Request,
    post_id: str,
    caller_id: CallerDep,
    post_svc: PostServiceDep,
):
    """Delete a post. Only the author may delete."""
    deleted_id = await post_svc.delete_post(caller_id, post_id)
    return PostDeleteResponse(
        deleted_post_id=deleted_id,
        message="Post deleted successfully",
    )
