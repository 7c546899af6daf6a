"""
Domain subpackage for the statistics feature.
"""

from .models import (
    FIRST_TIMER,
    NEW_CONVERT,
    UNKNOWN,
    AggregationResult,
    CategoryDistribution,
    ContactRecord,
    ContactSummary,
    Period,
    PeriodChanges,
    PeriodComparison,
    PeriodStats,
    PeriodWindow,
    StatisticsFilters,
    StatisticsQuery,
    TimeSeriesPoint,
)

__all__ = [
    "FIRST_TIMER",
    "NEW_CONVERT",
    "UNKNOWN",
    "AggregationResult",
    "CategoryDistribution",
    "ContactRecord",
    "ContactSummary",
    "Period",
    "PeriodChanges",
    "PeriodComparison",
    "PeriodStats",
    "PeriodWindow",
    "StatisticsFilters",
    "StatisticsQuery",
    "TimeSeriesPoint",
]
