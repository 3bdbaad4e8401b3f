"""Schemas for request metrics."""

from request_metrics.schemas.recorder_config import DEFAULT_LATENCY_BUCKETS, RecorderConfig

__all__ = ["DEFAULT_LATENCY_BUCKETS", "RecorderConfig"]
