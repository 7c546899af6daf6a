"""
Service layer for the statistics feature.
"""

from .statistics_service import (
    StatisticsRequestError,
    StatisticsService,
    parse_filters,
    statistics_service,
)
from .strategies import AggregationStrategy, LocalAggregationStrategy, RemoteAggregationStrategy

__all__ = [
    "AggregationStrategy",
    "LocalAggregationStrategy",
    "RemoteAggregationStrategy",
    "StatisticsRequestError",
    "StatisticsService",
    "parse_filters",
    "statistics_service",
]
