"""Domain layer: value objects, enums, ownership rules, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import decide_post_mutation
from app.domain.enums import MutationDecision, PostAction
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    PostlineException,
    ResourceNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from app.domain.value_objects import (
    CategoryName,
    PostContent,
    UserId,
    is_valid_id,
)

__all__ = [
    # Rules
    "decide_post_mutation",
    # Enums
    "MutationDecision",
    "PostAction",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "PostlineException",
    "ResourceNotFoundException",
    "StoreUnavailableException",
    "ValidationException",
    # Value objects
    "CategoryName",
    "PostContent",
    "UserId",
    "is_valid_id",
]
