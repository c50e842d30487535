"""Request body size limit middleware.

Rejects request bodies larger than max_bytes with 413 before the multipart
parser reads them. Declared Content-Length is checked up front; bodies
without one (chunked) are buffered and counted. Raw ASGI.
"""

import json
from typing import Callable


def _content_length(scope: dict) -> int | None:
    for k, v in scope.get("headers", []):
        if k.lower() == b"content-length":
            try:
                return int(v)
            except ValueError:
                return None
    return None


async def _send_413(send: Callable, max_bytes: int) -> None:
    """Send 413 Payload Too Large in the API error shape."""
    body = json.dumps(
        {
            "success": False,
            "message": f"Request body must be at most {max_bytes} bytes",
            "error": "PAYLOAD_TOO_LARGE",
            "details": {"max_bytes": max_bytes},
        }
    ).encode()
    await send({
        "type": "http.response.start",
        "status": 413,
        "headers": [(b"content-type", b"application/json")],
    })
    await send({"type": "http.response.body", "body": body, "more_body": False})


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes."""

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") in ("GET", "HEAD", "OPTIONS"):
            await app(scope, receive, send)
            return

        declared = _content_length(scope)
        if declared is not None:
            if declared > max_bytes:
                await _send_413(send, max_bytes)
                return
            await app(scope, receive, send)
            return

        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            total += len(chunk)
            if total > max_bytes:
                await _send_413(send, max_bytes)
                return
            chunks.append(chunk)
            if not message.get("more_body", False):
                break

        body = b"".join(chunks)
        replayed = False

        async def replay() -> dict:
            nonlocal replayed
            if replayed:
                return await receive()
            replayed = True
            return {"type": "http.request", "body": body, "more_body": False}

        await app(scope, replay, send)

    return asgi_app
