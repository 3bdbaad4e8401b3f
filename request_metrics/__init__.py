"""Prometheus request count and latency metrics for ASGI applications."""

from request_metrics.adapters.request_metrics.prometheus import (
    REQUEST_DURATION_NAME,
    REQUESTS_TOTAL_NAME,
)
from request_metrics.api.context import MATCHED_ROUTE_PATH_KEY, set_matched_route_path
from request_metrics.api.middleware import RequestMetricsMiddleware
from request_metrics.api.recorder import (
    RequestMetricsRecorder,
    new_recorder,
    recorder_from_settings,
    status_text,
)
from request_metrics.core.exceptions import MetricsRegistrationError, RequestMetricsError
from request_metrics.core.logging import configure_logging
from request_metrics.schemas.recorder_config import DEFAULT_LATENCY_BUCKETS, RecorderConfig

__all__ = [
    "DEFAULT_LATENCY_BUCKETS",
    "MATCHED_ROUTE_PATH_KEY",
    "MetricsRegistrationError",
    "REQUESTS_TOTAL_NAME",
    "REQUEST_DURATION_NAME",
    "RecorderConfig",
    "RequestMetricsError",
    "RequestMetricsMiddleware",
    "RequestMetricsRecorder",
    "configure_logging",
    "new_recorder",
    "recorder_from_settings",
    "set_matched_route_path",
    "status_text",
]
