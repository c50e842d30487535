"""Request context using contextvars.

Holds the request id for the current request so log records emitted
anywhere during that request can carry it. Set by RequestIDMiddleware.
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token:
    """Bind request_id to the current context; returns a token for reset_request_id."""
    return _request_id.set(request_id)


def reset_request_id(token: Token) -> None:
    """Restore the request id that was bound before set_request_id."""
    _request_id.reset(token)


def get_request_id() -> str | None:
    """Return the current request id, or None outside a request."""
    return _request_id.get()
