"""Post API schemas.

Field names on the wire are camelCase (profilePicture, createdAt, ...);
the models accept either form on input.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.application.dtos.post import PostResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AuthorResponse(_CamelModel):
    """Author display fields embedded in a post."""

    id: str
    username: str = ""
    fullname: str = ""
    profile_picture: str | None = None


class CategoryResponse(_CamelModel):
    """Category embedded in a post."""

    id: str
    name: str


class PostResponse(_CamelModel):
    """A post as returned by every post endpoint."""

    id: str
    content: str
    author: AuthorResponse
    image: str | None = None
    tags: list[str] = Field(default_factory=list)
    category: CategoryResponse
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_result(cls, post: PostResult) -> "PostResponse":
        return cls(
            id=post.id,
            content=post.content,
            author=AuthorResponse(
                id=post.author.id,
                username=post.author.username,
                fullname=post.author.fullname,
                profile_picture=post.author.profile_picture,
            ),
            image=post.image,
            tags=list(post.tags),
            category=CategoryResponse(id=post.category.id, name=post.category.name),
            created_at=post.created_at,
            updated_at=post.updated_at,
        )


class PostUpdateRequest(BaseModel):
    """Request body for PUT /posts/{id}. Emptiness is checked by the service."""

    content: str = Field(..., max_length=10000)


class PostListResponse(BaseModel):
    """Envelope for GET /posts and GET /posts/user/{id}."""

    success: bool = True
    data: list[PostResponse]
    message: str


class PostDataResponse(BaseModel):
    """Envelope whose data is a single post (POST /posts)."""

    success: bool = True
    data: PostResponse
    message: str


class SinglePostData(BaseModel):
    post: PostResponse


class SinglePostResponse(BaseModel):
    """Envelope for GET /posts/{id} and PUT /posts/{id}: data.post."""

    success: bool = True
    data: SinglePostData
    message: str


class CategoryPostsData(BaseModel):
    posts: list[PostResponse]


class CategoryPostsResponse(BaseModel):
    """Envelope for GET /posts/category/{id}: data.posts."""

    success: bool = True
    data: CategoryPostsData
    message: str


class PostDeleteResponse(BaseModel):
    """Response for DELETE /posts/{id}."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    deleted_post_id: str = Field(..., alias="deletedPostId")
    message: str
