"""Core protocols for dependency injection."""

from request_metrics.core.protocols.request_metrics import RequestMetrics

__all__ = ["RequestMetrics"]
