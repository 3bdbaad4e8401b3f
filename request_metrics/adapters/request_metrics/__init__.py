"""Request metrics adapters."""

from request_metrics.adapters.request_metrics.fake import FakeRequestMetrics
from request_metrics.adapters.request_metrics.prometheus import PrometheusRequestMetrics

__all__ = ["PrometheusRequestMetrics", "FakeRequestMetrics"]
