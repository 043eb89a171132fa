"""Request body size limit middleware.

Media requests are small JSON documents, so the whole body is read here
and rejected with 400 {"error": "Request body too large"} once it passes
max_bytes, whether the client sent Content-Length or chunked encoding.
A declared Content-Length over the limit is rejected before reading.
Uses raw ASGI (no BaseHTTPMiddleware) for production-safe streaming and background tasks.
"""

import logging
from typing import Callable

from media_gateway.middleware._asgi import get_header, send_json

logger = logging.getLogger(__name__)

TOO_LARGE_MESSAGE = "Request body too large"


def RequestSizeLimitMiddleware(app: Callable, max_bytes: int) -> Callable:
    """Reject requests whose body exceeds max_bytes. Raw ASGI."""

    async def reject(send: Callable, size: int) -> None:
        logger.info("Rejected request body of %s bytes (max %s)", size, max_bytes)
        await send_json(send, 400, {"error": TOO_LARGE_MESSAGE})

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or scope.get("method") in ("GET", "HEAD", "OPTIONS"):
            await app(scope, receive, send)
            return

        content_length = get_header(scope, "content-length")
        if content_length:
            try:
                declared = int(content_length)
            except ValueError:
                declared = None
            if declared is not None and declared > max_bytes:
                await reject(send, declared)
                return

        chunks: list[bytes] = []
        total = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            if message["type"] != "http.request":
                continue
            body = message.get("body", b"")
            total += len(body)
            if total > max_bytes:
                await reject(send, total)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        replayed = False

        async def replay_receive() -> dict:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": b"".join(chunks), "more_body": False}
            return await receive()

        await app(scope, replay_receive, send)

    return asgi_app
