"""Request metrics recorder.

Wraps the rest of an ASGI chain and records one counter increment and one
latency observation per completed HTTP request, labeled by status text,
method and route path.
"""

import time
from http import HTTPStatus
from typing import Callable, Optional

from prometheus_client import CollectorRegistry
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from request_metrics.adapters.request_metrics.prometheus import PrometheusRequestMetrics
from request_metrics.api.context import get_matched_route_path
from request_metrics.core.config import Settings, settings as default_settings
from request_metrics.core.logging import logger
from request_metrics.core.protocols.request_metrics import RequestMetrics
from request_metrics.schemas.recorder_config import RecorderConfig


def status_text(code: int) -> str:
    """Render a status code as ``"<code> <reason>"``, e.g. ``"404 Not Found"``."""
    try:
        phrase = HTTPStatus(code).phrase
    except ValueError:
        return str(code)
    return f"{code} {phrase}"


class StatusRecordingSend:
    """Wraps an ASGI ``send`` and remembers the response status.

    Only the first ``http.response.start`` counts.  All messages are
    forwarded unchanged.
    """

    def __init__(self, send: Send) -> None:
        self._send = send
        self._status: Optional[int] = None

    @property
    def response_started(self) -> bool:
        return self._status is not None

    @property
    def status(self) -> int:
        """Status actually sent, or 200 if the app never started a response."""
        if self._status is None:
            return HTTPStatus.OK.value
        return self._status

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start" and self._status is None:
            self._status = int(message["status"])
        await self._send(message)


class RequestMetricsRecorder:
    """Records request count and latency around a downstream ASGI app.

    Holds no per-request state and takes no locks; concurrent requests are
    safe as long as the injected ``RequestMetrics`` is.
    """

    def __init__(
        self,
        metrics: RequestMetrics,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._metrics = metrics
        self._clock = clock
        self._logger = logger.with_context(component="request_metrics_recorder")

    @property
    def metrics(self) -> RequestMetrics:
        return self._metrics

    async def intercept(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
        call_next: ASGIApp,
    ) -> None:
        """Run ``call_next`` and record metrics once it returns.

        Exceptions from ``call_next`` propagate and the request is not
        recorded.
        """
        if scope["type"] != "http":
            await call_next(scope, receive, send)
            return

        path = get_matched_route_path(scope)
        status_send = StatusRecordingSend(send)

        start = self._clock()
        await call_next(scope, receive, status_send)
        elapsed_ms = max((self._clock() - start) * 1000.0, 0.0)

        # Routing happens downstream in ASGI, so the scope may only now
        # carry the matched route.
        if path is None:
            path = get_matched_route_path(scope)
        if path is None:
            path = scope.get("path", "")
            self._logger.debug(f"No route matched, labeling request with raw path {path}")

        self._metrics.observe_request(
            code=status_text(status_send.status),
            method=scope["method"].upper(),
            path=path,
            duration_ms=elapsed_ms,
        )


def new_recorder(
    service_name: str,
    *buckets: float,
    registry: Optional[CollectorRegistry] = None,
) -> RequestMetricsRecorder:
    """Register the request series and return a recorder bound to them.

    Args:
        service_name: Value of the constant ``service`` label.
        *buckets: Latency histogram upper bounds in milliseconds.  Defaults
            to 300, 1200 and 5000 when omitted.
        registry: Registry to register on.  Defaults to the process-wide
            prometheus-client registry.

    Raises:
        MetricsRegistrationError: A series with the same name already exists
            in ``registry``.
        pydantic.ValidationError: ``service_name`` is empty or the buckets are
            not positive and strictly increasing.
    """
    config = RecorderConfig(service_name=service_name, latency_buckets=buckets)
    return RequestMetricsRecorder(PrometheusRequestMetrics(config, registry=registry))


def recorder_from_settings(
    settings: Optional[Settings] = None,
    registry: Optional[CollectorRegistry] = None,
) -> RequestMetricsRecorder:
    """Build a recorder from ``METRICS_SERVICE_NAME`` and ``METRICS_LATENCY_BUCKETS``."""
    settings = settings or default_settings
    return new_recorder(
        settings.METRICS_SERVICE_NAME,
        *settings.METRICS_LATENCY_BUCKETS,
        registry=registry,
    )
