"""
Pydantic Schemas for Scoreboard Inputs

These schemas validate the data that enters the engine from outside:
metric definitions (configuration) and metric observations (supplied by the
data source). Both are frozen once constructed.
"""

import math
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .entities import MetricDirection


class MetricDefinition(BaseModel):
    """A registered metric: how to read it and how much it counts."""
    model_config = ConfigDict(frozen=True)

    key: str = Field(min_length=1, description="Metric identifier, e.g. 'aht'")
    display_name: str = Field(default="", description="Label shown on dashboards")
    weight: float = Field(ge=0.0, le=1.0, description="Share of the overall score")
    direction: MetricDirection = MetricDirection.HIGHER_IS_BETTER
    target: float = Field(gt=0.0, description="Raw value that earns a full score")
    unit: str = ""

    @property
    def higher_is_better(self) -> bool:
        return self.direction == MetricDirection.HIGHER_IS_BETTER


class MetricObservation(BaseModel):
    """One raw measurement of one metric for one user."""
    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1)
    metric_key: str = Field(min_length=1)
    raw_value: float
    timestamp: datetime

    @field_validator("raw_value")
    @classmethod
    def _finite(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("raw_value must be a finite number")
        return value

    @field_validator("timestamp")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        # Naive timestamps are taken as UTC; aware ones are converted to UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
