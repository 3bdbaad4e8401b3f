"""Prometheus implementation of the RequestMetrics protocol.

Registers a request counter and a latency histogram, both partitioned by
status text, method and route path.  prometheus-client has no constant
labels, so ``service`` is the first label name of both series and is
always bound to the configured service name.

Series are registered on the process-wide default registry unless a
registry is injected; registering twice on one registry is fatal.
"""

from typing import Any, Callable

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)
from prometheus_client.metrics import MetricWrapperBase

from request_metrics.core.exceptions import MetricsRegistrationError
from request_metrics.core.logging import logger
from request_metrics.schemas.recorder_config import RecorderConfig

REQUESTS_TOTAL_NAME = "negroni_requests_total"
REQUEST_DURATION_NAME = "negroni_request_duration_milliseconds"

_LABEL_NAMES = ("service", "code", "method", "path")

# Message prefix prometheus-client uses for a name collision.
_DUPLICATE_PREFIX = "Duplicated timeseries in CollectorRegistry"


class PrometheusRequestMetrics:
    """Prometheus-backed request count and latency collection."""

    def __init__(
        self,
        config: RecorderConfig,
        registry: CollectorRegistry | None = None,
    ) -> None:
        self._config = config
        self._registry = REGISTRY if registry is None else registry
        self._logger = logger.with_context(
            service=config.service_name,
            component="prometheus_request_metrics",
        )

        self._requests_total = self._register(
            REQUESTS_TOTAL_NAME,
            lambda: Counter(
                REQUESTS_TOTAL_NAME,
                "How many HTTP requests processed, partitioned by status code, "
                "method and HTTP path.",
                _LABEL_NAMES,
                registry=self._registry,
            ),
        )

        try:
            self._request_duration = self._register(
                REQUEST_DURATION_NAME,
                lambda: Histogram(
                    REQUEST_DURATION_NAME,
                    "How long it took to process the request, partitioned by status code, "
                    "method and HTTP path.",
                    _LABEL_NAMES,
                    buckets=config.latency_buckets,
                    registry=self._registry,
                ),
            )
        except MetricsRegistrationError:
            # Leave the registry as it was so construction can be retried.
            self._registry.unregister(self._requests_total)
            raise

        self._logger.info(
            f"Registered {REQUESTS_TOTAL_NAME} and {REQUEST_DURATION_NAME} "
            f"with buckets {list(config.latency_buckets)}"
        )

    def _register(self, name: str, factory: Callable[[], MetricWrapperBase]) -> Any:
        try:
            return factory()
        except ValueError as e:
            duplicate = str(e).startswith(_DUPLICATE_PREFIX)
            self._logger.error(f"Failed to register metric series {name}: {e}")
            raise MetricsRegistrationError(name, str(e), duplicate=duplicate) from e

    @property
    def service_name(self) -> str:
        return self._config.service_name

    @property
    def buckets(self) -> tuple[float, ...]:
        return self._config.latency_buckets

    # -- RequestMetrics protocol methods --

    def observe_request(
        self,
        code: str,
        method: str,
        path: str,
        duration_ms: float,
    ) -> None:
        labels = {
            "service": self._config.service_name,
            "code": code,
            "method": method,
            "path": path,
        }
        self._requests_total.labels(**labels).inc()
        self._request_duration.labels(**labels).observe(duration_ms)

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST

    def generate(self) -> bytes:
        return generate_latest(self._registry)
