from __future__ import annotations

from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

TOO_LARGE = {"error": "Request entity too large"}


class BodySizeLimitMiddleware:
    """Reject request bodies larger than ``max_body_bytes`` with 413.

    A declared ``Content-Length`` over the limit is refused up front. Every
    body, chunked ones included, is also counted as it is read; it is held
    in memory (at most ``max_body_bytes``) and replayed to the app.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int) -> None:
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        for name, value in scope.get("headers", []):
            if name == b"content-length":
                if value.isdigit() and int(value) > self.max_body_bytes:
                    await JSONResponse(TOO_LARGE, status_code=413)(scope, receive, send)
                    return
                break

        chunks = []
        total = 0
        while True:
            message = await receive()
            if message["type"] != "http.request":
                # client went away before the body was complete
                await self.app(scope, _replay([message], receive), send)
                return
            body = message.get("body", b"")
            total += len(body)
            if total > self.max_body_bytes:
                await JSONResponse(TOO_LARGE, status_code=413)(scope, receive, send)
                return
            chunks.append(body)
            if not message.get("more_body", False):
                break

        buffered = {"type": "http.request", "body": b"".join(chunks), "more_body": False}
        await self.app(scope, _replay([buffered], receive), send)


def _replay(messages, receive: Receive) -> Receive:
    pending = list(messages)

    async def _receive() -> Message:
        if pending:
            return pending.pop(0)
        return await receive()

    return _receive
