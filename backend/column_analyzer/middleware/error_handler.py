"""
Error handling middleware.

Any exception that escapes a route becomes a JSON 500 response with a
stable shape, so the rendering layer can always show a message.

Pure ASGI middleware rather than BaseHTTPMiddleware, which corrupts
response bodies when several are stacked.
"""

import json
import logging

from starlette.types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger("column_analyzer.middleware.error_handler")


class ErrorHandlerMiddleware:
    """Converts unhandled exceptions into structured JSON error responses."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_wrapper(message):
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception:
            path = scope.get("path", "unknown")
            method = scope.get("method", "unknown")
            logger.exception("Unhandled exception on %s %s", method, path)
            if response_started:
                raise

            body = json.dumps({
                "error": "internal_server_error",
                "message": "Analysis failed unexpectedly. Please try again.",
                "path": path,
            }).encode("utf-8")

            await send({
                "type": "http.response.start",
                "status": 500,
                "headers": [
                    [b"content-type", b"application/json"],
                    [b"content-length", str(len(body)).encode()],
                ],
            })
            await send({
                "type": "http.response.body",
                "body": body,
            })
