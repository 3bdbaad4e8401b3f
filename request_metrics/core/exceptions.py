"""Exceptions raised by the request metrics package."""


class RequestMetricsError(Exception):
    """Base class for request metrics errors."""


class MetricsRegistrationError(RequestMetricsError):
    """A metric series could not be registered with the collector registry.

    ``duplicate`` is True when the series name is already taken in the
    registry. Either way this is a wiring mistake and must abort startup.
    """

    def __init__(self, metric_name: str, reason: str, duplicate: bool = False) -> None:
        self.metric_name = metric_name
        self.duplicate = duplicate
        if duplicate:
            message = f"Metric series '{metric_name}' is already registered: {reason}"
        else:
            message = f"Failed to register metric series '{metric_name}': {reason}"
        super().__init__(message)
