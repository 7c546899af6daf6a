# app/models/api/statistics_response.py
"""
Statistics API response models.
Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TimeSeriesPointResponse(_CamelModel):
    """One bucket of the contacts trend chart."""

    period: str = Field(..., description="Bucket label (Week N, MMM YY or YYYY)")
    new_convert: int = 0
    first_timer: int = 0
    total: int = 0
    date: str = Field(..., description="ISO timestamp anchoring the bucket")


class DistributionResponse(_CamelModel):
    contact_type: dict[str, int] = Field(default_factory=dict)
    service_type: dict[str, int] = Field(default_factory=dict)
    gender: dict[str, int] = Field(default_factory=dict)
    district: dict[str, int] = Field(default_factory=dict)


class MetricCardResponse(_CamelModel):
    """Summary figure paired with its percent change versus the previous period."""

    key: str
    title: str
    value: int | float
    change: float
    trend: Literal["up", "down", "neutral"]


class SummaryResponse(_CamelModel):
    total_contacts: int = 0
    new_converts: int = 0
    first_timers: int = 0
    conversion_rate: float = 0.0
    average_per_month: float = 0.0


class StatisticsResponse(_CamelModel):
    """Uniform statistics contract, whichever aggregation path produced it."""

    time_series: list[TimeSeriesPointResponse]
    distribution: DistributionResponse
    metrics: list[MetricCardResponse]
    summary: SummaryResponse
    total_contacts: int


class StatisticsErrorResponse(BaseModel):
    error: str
    details: str
