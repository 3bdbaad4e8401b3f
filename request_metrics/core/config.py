"""Configuration settings for request metrics.

Values are read from the environment (and an optional ``.env`` file).
List values such as ``METRICS_LATENCY_BUCKETS`` are given as JSON, e.g.
``METRICS_LATENCY_BUCKETS='[50, 100, 250]'``.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the request metrics recorder."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    METRICS_SERVICE_NAME: str = Field(
        default="app",
        min_length=1,
        description="Value of the constant 'service' label on every series",
    )
    METRICS_LATENCY_BUCKETS: list[float] = Field(
        default=[300.0, 1200.0, 5000.0],
        description="Latency histogram upper bounds in milliseconds",
    )
    LOG_LEVEL: str = Field(default="INFO", description="Log level for the request_metrics logger")


settings = Settings()
