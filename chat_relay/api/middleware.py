from fastapi import HTTPException, status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..log import log


class BodySizeLimitMiddleware:
    """
    Rejects request bodies larger than ``max_body_bytes`` with 413.

    A declared Content-Length over the limit is refused before anything is
    read. Bodies without one (chunked uploads) are counted as they arrive,
    and reading past the limit raises a 413 HTTPException into whoever is
    consuming the body, which the app's HTTPException handler renders.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > self.max_body_bytes:
            log().warning(f"❌ Payload too large: {content_length} bytes (limit {self.max_body_bytes})")
            response = JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={"error": "Payload too large"},
            )
            await response(scope, receive, send)
            return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    log().warning(f"❌ Payload too large: over {self.max_body_bytes} bytes received")
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail="Payload too large",
                    )
            return message

        await self.app(scope, limited_receive, send)
