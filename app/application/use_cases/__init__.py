"""Application use cases: one entry point per workflow."""

from app.application.use_cases.posts import PostService

__all__ = ["PostService"]
