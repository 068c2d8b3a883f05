"""
Unhandled Error Middleware

Turns any exception that escapes the routes into a generic 500
{"error": "Internal server error"}. It sits inside CORSMiddleware so the
response still carries the CORS headers a cross-origin browser needs to read
it. Details are logged, never returned.
"""

import logging

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger(__name__)


class UnhandledErrorMiddleware:
    """Pure ASGI middleware answering 500 for unexpected exceptions."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, tracking_send)
        except Exception as exc:
            logger.error(
                f"Unhandled error: path={scope.get('path')}, error={type(exc).__name__}: {exc}",
                exc_info=exc
            )
            if response_started:
                raise
            response = JSONResponse(status_code=500, content={"error": "Internal server error"})
            await response(scope, receive, send)
