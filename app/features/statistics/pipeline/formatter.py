"""
Response formatter.

Normalizes the remote SQL function payloads into the same domain values
the local aggregator produces, and shapes an AggregationResult into the
StatisticsResponse contract (time series, distribution, four metric
cards, summary, total).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from app.models.api.statistics_response import (
    DistributionResponse,
    MetricCardResponse,
    StatisticsResponse,
    SummaryResponse,
    TimeSeriesPointResponse,
)

from ..domain.models import (
    AggregationResult,
    CategoryDistribution,
    ContactSummary,
    Period,
    PeriodChanges,
    PeriodComparison,
    PeriodStats,
    TimeSeriesPoint,
)


def _number(value: Any) -> int | float:
    """Numeric coercion where missing or unparseable values read as 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int | float):
        return value
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0
    if parsed != parsed:  # NaN
        return 0
    return int(parsed) if parsed.is_integer() else parsed


def _count(value: Any) -> int:
    return int(_number(value))


def _iso(value: Any) -> str:
    if isinstance(value, datetime | date):
        return value.isoformat()
    return "" if value is None else str(value)


def trend_for(change: float) -> str:
    if change > 0:
        return "up"
    if change < 0:
        return "down"
    return "neutral"


# =======================================================================
# Remote payload normalization
# =======================================================================


def time_series_from_rows(rows: list[dict[str, Any]] | None) -> list[TimeSeriesPoint]:
    """Rows of get_contact_trends: period_label, *_count, period_date."""
    return [
        TimeSeriesPoint(
            period=str(row.get("period_label") or ""),
            new_convert=_count(row.get("new_convert_count")),
            first_timer=_count(row.get("first_timer_count")),
            total=_count(row.get("total_count")),
            date=_iso(row.get("period_date")),
        )
        for row in rows or []
    ]


def distribution_from_payload(payload: dict[str, Any] | None) -> CategoryDistribution:
    payload = payload or {}

    def _counts(key: str) -> dict[str, int]:
        return {str(name): _count(count) for name, count in (payload.get(key) or {}).items()}

    return CategoryDistribution(
        contact_type=_counts("contactType"),
        service_type=_counts("serviceType"),
        gender=_counts("gender"),
        district=_counts("district"),
    )


def _stats_from_payload(payload: dict[str, Any] | None) -> PeriodStats:
    payload = payload or {}
    return PeriodStats(
        total=_count(payload.get("total")),
        new_convert=_count(payload.get("newConvert")),
        first_timer=_count(payload.get("firstTimer")),
    )


def comparison_from_payload(payload: dict[str, Any] | None) -> PeriodComparison:
    payload = payload or {}
    changes = payload.get("changes") or {}
    return PeriodComparison(
        current=_stats_from_payload(payload.get("current")),
        previous=_stats_from_payload(payload.get("previous")),
        changes=PeriodChanges(
            total=float(_number(changes.get("total"))),
            new_convert=float(_number(changes.get("newConvert"))),
            first_timer=float(_number(changes.get("firstTimer"))),
        ),
    )


def summary_from_payload(payload: dict[str, Any] | None) -> ContactSummary:
    payload = payload or {}
    return ContactSummary(
        total_contacts=_count(payload.get("totalContacts")),
        new_converts=_count(payload.get("newConverts")),
        first_timers=_count(payload.get("firstTimers")),
        conversion_rate=float(_number(payload.get("conversionRate"))),
        average_per_month=float(_number(payload.get("averagePerMonth"))),
    )


# =======================================================================
# Response shaping
# =======================================================================


def build_metrics(
    comparison: PeriodComparison, summary: ContactSummary, period: Period
) -> list[MetricCardResponse]:
    changes = comparison.changes
    cards = [
        ("total_contacts", "Total Contacts", summary.total_contacts, changes.total),
        ("current_period", period.label, comparison.current.total, changes.total),
        ("new_converts", "New Converts", summary.new_converts, changes.new_convert),
        ("first_timers", "First Timers", summary.first_timers, changes.first_timer),
    ]
    return [
        MetricCardResponse(key=key, title=title, value=value, change=change, trend=trend_for(change))
        for key, title, value, change in cards
    ]


def format_response(result: AggregationResult, period: Period) -> StatisticsResponse:
    summary = result.summary
    distribution = result.distribution

    return StatisticsResponse(
        time_series=[
            TimeSeriesPointResponse(
                period=point.period,
                new_convert=point.new_convert,
                first_timer=point.first_timer,
                total=point.total,
                date=point.date,
            )
            for point in result.time_series
        ],
        distribution=DistributionResponse(
            contact_type=dict(distribution.contact_type),
            service_type=dict(distribution.service_type),
            gender=dict(distribution.gender),
            district=dict(distribution.district),
        ),
        metrics=build_metrics(result.comparison, summary, period),
        summary=SummaryResponse(
            total_contacts=summary.total_contacts,
            new_converts=summary.new_converts,
            first_timers=summary.first_timers,
            conversion_rate=summary.conversion_rate,
            average_per_month=summary.average_per_month,
        ),
        total_contacts=summary.total_contacts,
    )
