"""Fake RequestMetrics for testing.

Records all calls in memory so tests can assert on recorder behaviour
without reaching into prometheus-client internals.
"""

from dataclasses import dataclass


@dataclass
class RequestRecord:
    """Single observed request."""

    code: str
    method: str
    path: str
    duration_ms: float


class FakeRequestMetrics:
    """In-memory spy implementing the RequestMetrics protocol.

    Usage:
        fake = FakeRequestMetrics()
        recorder = RequestMetricsRecorder(fake)
        # … drive a request through the recorder …
        assert fake.requests[0].path == "/orders/:id"
    """

    def __init__(self) -> None:
        self.requests: list[RequestRecord] = []
        self.generate_calls: int = 0

    def observe_request(
        self,
        code: str,
        method: str,
        path: str,
        duration_ms: float,
    ) -> None:
        self.requests.append(RequestRecord(code, method, path, duration_ms))

    @property
    def content_type(self) -> str:
        return "text/plain"

    def generate(self) -> bytes:
        self.generate_calls += 1
        return b"# fake metrics\n"

    # -- test helpers --

    def count(self, code: str, method: str, path: str) -> int:
        """Number of requests recorded under one label tuple."""
        return sum(1 for r in self.requests if (r.code, r.method, r.path) == (code, method, path))

    def clear(self) -> None:
        """Reset all recorded state."""
        self.requests.clear()
        self.generate_calls = 0
