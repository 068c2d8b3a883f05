"""
Request Body Size Limit Middleware

Rejects requests whose body exceeds the configured ceiling. A declared
Content-Length is checked before any route runs; bodies without one (chunked
transfer) are counted as they are received and cut off once they pass the
ceiling. The upload endpoint applies its own, smaller per-file ceiling on top
of this one.
"""

import logging

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class RequestBodyTooLarge(Exception):
    """Raised from the wrapped receive channel once the body passes the limit."""


class BodySizeLimitMiddleware:
    """
    Pure ASGI middleware enforcing a maximum request body size.

    Attributes:
        app: The wrapped ASGI application
        max_body_size: Largest accepted body in bytes
    """

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        logger.warning(
            f"Request body rejected: path={scope.get('path')}, "
            f"size={size}, max={self.max_body_size}"
        )
        response = JSONResponse({"error": "Request body too large"}, status_code=413)
        await response(scope, receive, send)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = JSONResponse(
                    {"error": "Invalid Content-Length header"},
                    status_code=400
                )
                await response(scope, receive, send)
                return

            if declared > self.max_body_size:
                await self._reject(scope, receive, send, declared)
                return

        received = 0
        exceeded = False
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received, exceeded
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    exceeded = True
                    raise RequestBodyTooLarge()
            return message

        async def guarded_send(message: Message) -> None:
            nonlocal response_started
            # Whatever the app answers after the cut-off is replaced by the 413
            if exceeded:
                return
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except RequestBodyTooLarge:
            if response_started:
                raise

        if exceeded and not response_started:
            await self._reject(scope, receive, send, received)
