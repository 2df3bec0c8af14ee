"""
Request logging middleware.

Logs method, path, status, uploaded byte count and duration of every
request and adds an ``x-response-time-ms`` header. Health checks log at
DEBUG and server errors at WARNING; everything else logs at INFO.
"""

import logging
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("column_analyzer.middleware.request_logger")

QUIET_PATHS = frozenset({"/health"})


class RequestLoggerMiddleware:
    """Logs one line per HTTP request."""

    def __init__(self, app: ASGIApp, quiet_paths=QUIET_PATHS):
        self.app = app
        self.quiet_paths = frozenset(quiet_paths)

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        method = scope.get("method", "?")
        path = scope.get("path", "?")
        upload_bytes = _content_length(scope)
        status_code = 0

        async def send_wrapper(message: Message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
                headers = list(message.get("headers", []))
                headers.append((b"x-response-time-ms", str(_elapsed_ms(start_time)).encode()))
                message = {**message, "headers": headers}
            elif message["type"] == "http.response.body" and not message.get("more_body", False):
                logger.log(
                    self._level(path, status_code),
                    "%s %s -> %s (%d bytes in, %.2fms)",
                    method, path, status_code, upload_bytes, _elapsed_ms(start_time),
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)

    def _level(self, path: str, status_code: int) -> int:
        if status_code >= 500:
            return logging.WARNING
        if path in self.quiet_paths:
            return logging.DEBUG
        return logging.INFO


def _content_length(scope: Scope) -> int:
    for name, value in scope.get("headers", []):
        if name == b"content-length":
            try:
                return int(value)
            except ValueError:
                return 0
    return 0


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
