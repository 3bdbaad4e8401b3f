"""Shared fixtures for request metrics tests."""

import pytest
from prometheus_client import CollectorRegistry

from request_metrics.adapters.request_metrics import FakeRequestMetrics


@pytest.fixture
def registry():
    """Isolated registry so tests never touch the process-wide one."""
    return CollectorRegistry()


@pytest.fixture
def fake_metrics():
    return FakeRequestMetrics()


@pytest.fixture
def make_scope():
    """Factory for minimal ASGI HTTP scopes."""

    def factory(path: str = "/orders/42", method: str = "GET", scope_type: str = "http", **extra):
        scope = {
            "type": scope_type,
            "method": method,
            "path": path,
            "headers": [],
            "query_string": b"",
        }
        scope.update(extra)
        return scope

    return factory


@pytest.fixture
def make_app():
    """Factory for downstream ASGI apps that answer with a fixed status."""

    def factory(status: int = 200, body: bytes = b"ok", on_call=None):
        async def app(scope, receive, send):
            if on_call is not None:
                await on_call(scope)
            await send({"type": "http.response.start", "status": status, "headers": []})
            await send({"type": "http.response.body", "body": body})

        return app

    return factory


@pytest.fixture
def asgi_io():
    """A receive/send pair; ``sent`` collects every message sent."""

    class _IO:
        def __init__(self):
            self.sent = []

        async def receive(self):
            return {"type": "http.request", "body": b"", "more_body": False}

        async def send(self, message):
            self.sent.append(message)

    return _IO()
