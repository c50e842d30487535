"""Domain enumerations for the Postline application.

Enums represent fixed sets of domain values (e.g. mutation decisions).
"""

from enum import Enum


class MutationDecision(str, Enum):
    """Outcome of the ownership guard that runs before a post mutation.

    Only ALLOWED lets the store mutation proceed.
    """

    ALLOWED = "allowed"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"


class PostAction(str, Enum):
    """Mutations an author may perform on their own post."""

    UPDATE = "update"
    DELETE = "delete"
