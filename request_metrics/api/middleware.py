"""ASGI middleware that records request metrics.

Usage:
    recorder = new_recorder("orders")
    app.add_middleware(RequestMetricsMiddleware, recorder=recorder)
"""

from starlette.types import ASGIApp, Receive, Scope, Send

from request_metrics.api.recorder import RequestMetricsRecorder


class RequestMetricsMiddleware:
    """Pure ASGI middleware delegating each request to a recorder."""

    def __init__(self, app: ASGIApp, recorder: RequestMetricsRecorder) -> None:
        self.app = app
        self.recorder = recorder

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.recorder.intercept(scope, receive, send, self.app)
