"""Middleware configuration for FastAPI application."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from notify_service.infra.logging import remove_from_log_context, set_log_context

if TYPE_CHECKING:
    from fastapi import FastAPI
    from starlette.types import ASGIApp, Message, Receive, Scope, Send


class RequestIDMiddleware:
    """Attach a request id to the request state, log context and response.

    The id is taken from the ``X-Request-ID`` header or generated.
    """

    header_name = b"x-request-id"

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers") or [])
        raw = headers.get(self.header_name)
        request_id = raw.decode("latin-1") if raw else str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        set_log_context(request_id=request_id)

        async def send_with_header(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].append((self.header_name, request_id.encode("latin-1")))
            await send(message)

        try:
            await self.app(scope, receive, send_with_header)
        finally:
            remove_from_log_context("request_id")


def configure_middleware(app: FastAPI) -> None:
    """Install the application middleware."""
    app.add_middleware(RequestIDMiddleware)
