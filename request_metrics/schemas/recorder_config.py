"""Recorder configuration schema."""

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Upper bounds in milliseconds.
DEFAULT_LATENCY_BUCKETS: tuple[float, ...] = (300.0, 1200.0, 5000.0)


class RecorderConfig(BaseModel):
    """Immutable configuration fixed when the recorder is built."""

    model_config = ConfigDict(frozen=True)

    service_name: str = Field(
        ...,
        min_length=1,
        description="Constant 'service' label attached to every series",
    )
    latency_buckets: tuple[float, ...] = Field(
        default=DEFAULT_LATENCY_BUCKETS,
        description="Strictly increasing histogram upper bounds in milliseconds",
    )

    @field_validator("latency_buckets", mode="before")
    @classmethod
    def default_when_empty(cls, value: Any) -> Any:
        """Fall back to the default buckets when none are supplied."""
        if value is None or len(value) == 0:
            return DEFAULT_LATENCY_BUCKETS
        return value

    @field_validator("latency_buckets")
    @classmethod
    def validate_buckets(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        """Buckets must be finite, positive and strictly increasing."""
        if not all(math.isfinite(bound) and bound > 0 for bound in value):
            raise ValueError(f"latency buckets must be finite and positive, got {list(value)}")
        for lower, upper in zip(value, value[1:]):
            if upper <= lower:
                raise ValueError(f"latency buckets must be strictly increasing, got {list(value)}")
        return value
