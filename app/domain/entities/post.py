"""Post ownership rules.

A post's author is the only party allowed to update or delete it. The guard
returns a decision instead of raising so callers can short-circuit before any
store mutation is issued.
"""

from app.domain.enums import MutationDecision
from app.domain.value_objects.core import UserId


def decide_post_mutation(
    author_id: UserId | None, caller_id: UserId
) -> MutationDecision:
    """Return whether caller_id may mutate a post authored by author_id.

    Args:
        author_id: Author of the stored post, or None when the post does not exist.
        caller_id: Authenticated caller.

    Returns:
        NOT_FOUND when there is no post, FORBIDDEN when the caller is not the
        author, ALLOWED otherwise.
    """
    if author_id is None:
        return MutationDecision.NOT_FOUND
    if author_id != caller_id:
        return MutationDecision.FORBIDDEN
    return MutationDecision.ALLOWED
