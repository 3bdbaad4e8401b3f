"""RequestMetrics protocol for per-request instrumentation.

Abstracts metric collection so the recorder depends on a protocol rather
than a concrete library.  Production uses Prometheus; tests inject a fake
that records calls in memory.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestMetrics(Protocol):
    """Protocol for request count and latency collection."""

    def observe_request(
        self,
        code: str,
        method: str,
        path: str,
        duration_ms: float,
    ) -> None:
        """Record a completed request (count + latency).

        Args:
            code: Status text, e.g. ``"404 Not Found"``.
            method: Upper-case HTTP method (GET, POST, …).
            path: Route pattern, or the raw URL path when no route matched.
            duration_ms: Time spent in the downstream chain, in milliseconds.
        """
        ...

    @property
    def content_type(self) -> str:
        """MIME type for the serialized metrics output."""
        ...

    def generate(self) -> bytes:
        """Serialize the collected metrics in the exposition format."""
        ...
