"""End-to-end tests for RequestMetricsMiddleware."""

import math
import re

import pytest
from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient
from pydantic import ValidationError

from request_metrics import (
    MetricsRegistrationError,
    RequestMetricsMiddleware,
    new_recorder,
    set_matched_route_path,
)

_ORDER_ROUTE = re.compile(r"^/orders/[^/]+$")


def _bucket_bounds(registry):
    for family in registry.collect():
        if family.name == "negroni_request_duration_milliseconds":
            return [s.labels["le"] for s in family.samples if s.name.endswith("_bucket")]
    return []


class TestNewRecorder:
    def test_default_buckets(self, registry):
        recorder = new_recorder("orders", registry=registry)
        assert recorder.metrics.buckets == (300.0, 1200.0, 5000.0)

    def test_custom_buckets(self, registry):
        recorder = new_recorder("orders", 50, 100, registry=registry)
        assert recorder.metrics.buckets == (50.0, 100.0)

    def test_nan_bucket_is_rejected(self, registry):
        with pytest.raises(ValidationError):
            new_recorder("orders", 100, math.nan, registry=registry)

        assert list(registry.collect()) == []

    def test_second_recorder_on_same_registry_is_fatal(self, registry):
        new_recorder("orders", registry=registry)

        with pytest.raises(MetricsRegistrationError):
            new_recorder("billing", registry=registry)


class TestUpstreamRouterScenario:
    """A router in front of the middleware supplies the matched pattern."""

    @pytest.mark.asyncio
    async def test_not_found_on_order_route(self, registry, make_scope, make_app, asgi_io):
        recorder = new_recorder("orders", registry=registry)
        instrumented = RequestMetricsMiddleware(make_app(status=404), recorder=recorder)

        async def router(scope, receive, send):
            if _ORDER_ROUTE.match(scope["path"]):
                set_matched_route_path(scope, "/orders/:id")
            await instrumented(scope, receive, send)

        await router(make_scope(path="/orders/42"), asgi_io.receive, asgi_io.send)

        labels = {
            "service": "orders",
            "code": "404 Not Found",
            "method": "GET",
            "path": "/orders/:id",
        }
        assert registry.get_sample_value("negroni_requests_total", labels) == 1.0
        assert registry.get_sample_value("negroni_request_duration_milliseconds_count", labels) == 1.0
        assert _bucket_bounds(registry) == ["300.0", "1200.0", "5000.0", "+Inf"]
        assert (
            registry.get_sample_value(
                "negroni_requests_total", {**labels, "path": "/orders/42"}
            )
            is None
        )


class TestFastAPIIntegration:
    @pytest.fixture
    def client(self, registry):
        app = FastAPI()

        @app.get("/orders/{order_id}")
        async def get_order(order_id: str):
            if order_id == "42":
                raise HTTPException(status_code=404, detail="Order not found")
            return {"id": order_id}

        app.add_middleware(RequestMetricsMiddleware, recorder=new_recorder("orders", registry=registry))
        return TestClient(app)

    def test_route_template_used_as_path(self, client, registry):
        assert client.get("/orders/7").status_code == 200
        assert client.get("/orders/8").status_code == 200

        labels = {
            "service": "orders",
            "code": "200 OK",
            "method": "GET",
            "path": "/orders/{order_id}",
        }
        assert registry.get_sample_value("negroni_requests_total", labels) == 2.0

    def test_handled_http_exception_status(self, client, registry):
        assert client.get("/orders/42").status_code == 404

        labels = {
            "service": "orders",
            "code": "404 Not Found",
            "method": "GET",
            "path": "/orders/{order_id}",
        }
        assert registry.get_sample_value("negroni_requests_total", labels) == 1.0

    def test_unmatched_request_uses_raw_path(self, client, registry):
        assert client.get("/random-bot-path").status_code == 404

        labels = {
            "service": "orders",
            "code": "404 Not Found",
            "method": "GET",
            "path": "/random-bot-path",
        }
        assert registry.get_sample_value("negroni_requests_total", labels) == 1.0

    def test_mounted_app_route_keeps_mount_prefix(self, registry):
        items = FastAPI()

        @items.get("/items/{item_id}")
        async def get_item(item_id: str):
            return {"id": item_id}

        app = FastAPI()
        app.mount("/api/v1", items)
        app.add_middleware(RequestMetricsMiddleware, recorder=new_recorder("orders", registry=registry))

        assert TestClient(app).get("/api/v1/items/5").status_code == 200

        labels = {
            "service": "orders",
            "code": "200 OK",
            "method": "GET",
            "path": "/api/v1/items/{item_id}",
        }
        assert registry.get_sample_value("negroni_requests_total", labels) == 1.0
