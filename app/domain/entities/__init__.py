"""Domain entities and business rules."""

from app.domain.entities.post import decide_post_mutation

__all__ = ["decide_post_mutation"]
