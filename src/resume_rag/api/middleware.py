"""ASGI middleware binding a request id into the structlog context and timing requests."""

from __future__ import annotations

import time
from uuid import uuid4

import structlog
from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from resume_rag.observability.logger import get_logger

logger = get_logger("middleware")


class RequestContextMiddleware:
    """Pure ASGI so streamed (SSE) bodies pass through untouched.

    Duration is measured until the response headers are sent, which for a
    stream is time-to-first-byte.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = Headers(scope=scope).get("x-request-id") or str(uuid4())
        start = time.monotonic()
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                duration_ms = round((time.monotonic() - start) * 1000, 2)
                headers = MutableHeaders(scope=message)
                headers["X-Request-ID"] = request_id
                headers["X-Duration-MS"] = str(duration_ms)
                logger.info(
                    "request_completed",
                    method=scope["method"],
                    path=scope["path"],
                    status=message["status"],
                    duration_ms=duration_ms,
                )
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(
                "request_failed",
                method=scope["method"],
                path=scope["path"],
                error=str(e),
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
            raise
