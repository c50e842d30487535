"""Post use cases."""

from app.application.use_cases.posts.post_operations import PostService

__all__ = ["PostService"]
