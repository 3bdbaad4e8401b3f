"""Logging for request metrics.

``logger.with_context(...)`` returns a child logger that renders its
dimensions as ``key=value`` pairs after the message.

Importing the package attaches no output handler; records propagate to
whatever the host application configured.  Call ``configure_logging()``
to give the ``request_metrics`` logger its own stdout handler instead.
"""

import logging
import sys
from typing import Any, Optional

from request_metrics.core.config import settings

LOGGER_NAME = "request_metrics"

_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if context:
            dims = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
            message = f"{message} [{dims}]"
        return message


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter that carries a dict of context dimensions."""

    def with_context(self, **context: Any) -> "ContextualLogger":
        """Return a new logger with ``context`` merged over the current dimensions."""
        return ContextualLogger(self.logger, {**(self.extra or {}), **context})

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        extra = kwargs.setdefault("extra", {})
        extra["context"] = {**(self.extra or {}), **extra.get("context", {})}
        return msg, kwargs


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Send ``request_metrics`` records to stdout with context dimensions.

    Safe to call more than once.  Records stop propagating to the root
    logger so they are not printed twice.

    Args:
        level: Log level name.  Defaults to ``settings.LOG_LEVEL``.

    Raises:
        ValueError: ``level`` is not a known log level name.
    """
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel((level or settings.LOG_LEVEL).upper())
    if not any(isinstance(h.formatter, _ContextFormatter) for h in base.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_ContextFormatter(_LOG_FORMAT))
        base.addHandler(handler)
    base.propagate = False
    return base


def _build_logger(name: str) -> ContextualLogger:
    base = logging.getLogger(name)
    base.addHandler(logging.NullHandler())
    return ContextualLogger(base, {})


logger = _build_logger(LOGGER_NAME)
