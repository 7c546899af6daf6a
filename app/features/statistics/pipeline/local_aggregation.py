"""
In-memory aggregation of raw contact rows.

Used when categorical filters are active: the filtered rows for the
lookback window are fetched once and every statistic is derived here.
The output has exactly the shape the remote SQL functions produce.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta

from dateutil.relativedelta import relativedelta

from ..domain.models import (
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
    TimeSeriesPoint,
)
from .periods import BUCKET_COUNTS, current_period_start

# Fixed English abbreviations so labels do not depend on the process locale
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Summary average always spreads the total over twelve months
AVERAGE_MONTHS = 12


def calculate_change(current: float, previous: float) -> float:
    """Percent change; a zero baseline reads as +100% when anything happened."""
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def month_label(moment: datetime) -> str:
    """'MMM YY', e.g. 'Oct 26'."""
    return f"{_MONTH_ABBR[moment.month - 1]} {moment.year % 100:02d}"


def _bucket_anchors(period: Period, now: datetime) -> list[tuple[str, datetime]]:
    periods = BUCKET_COUNTS[period]
    anchors = []
    for offset in range(periods - 1, -1, -1):
        if period is Period.WEEKLY:
            anchor = now - timedelta(weeks=offset)
            label = f"Week {periods - offset}"
        elif period is Period.MONTHLY:
            anchor = now - relativedelta(months=offset)
            label = month_label(anchor)
        else:
            anchor = now - relativedelta(years=offset)
            label = str(anchor.year)
        anchors.append((label, anchor))
    return anchors


def _bucket_key(record: ContactRecord, period: Period, now: datetime) -> str | None:
    if period is Period.WEEKLY:
        weeks_diff = (now - record.created_at) // timedelta(weeks=1)
        if 0 <= weeks_diff < BUCKET_COUNTS[period]:
            return f"Week {BUCKET_COUNTS[period] - weeks_diff}"
        return None
    if period is Period.MONTHLY:
        return month_label(record.created_at)
    return str(record.created_at.year)


def build_time_series(
    records: Sequence[ContactRecord], period: Period, now: datetime
) -> list[TimeSeriesPoint]:
    """
    Bucket records oldest-to-newest.

    Weekly buckets come from the record's age in whole weeks; monthly and
    yearly buckets match on the record's own calendar label. Records whose
    key matches no bucket are left out.
    """
    buckets = {
        label: TimeSeriesPoint(period=label, date=anchor.isoformat())
        for label, anchor in _bucket_anchors(period, now)
    }

    for record in records:
        point = buckets.get(_bucket_key(record, period, now))
        if point is None:
            continue
        if record.contact_type == NEW_CONVERT:
            point.new_convert += 1
        elif record.contact_type == FIRST_TIMER:
            point.first_timer += 1
        point.total += 1

    return list(buckets.values())


def build_distribution(records: Sequence[ContactRecord]) -> CategoryDistribution:
    distribution = CategoryDistribution()
    for record in records:
        for counts, value in (
            (distribution.contact_type, record.contact_type),
            (distribution.service_type, record.service_type),
            (distribution.gender, record.gender),
            (distribution.district, record.district),
        ):
            key = value or UNKNOWN
            counts[key] = counts.get(key, 0) + 1
    return distribution


def _stats(records: Sequence[ContactRecord]) -> PeriodStats:
    return PeriodStats(
        total=len(records),
        new_convert=sum(1 for r in records if r.contact_type == NEW_CONVERT),
        first_timer=sum(1 for r in records if r.contact_type == FIRST_TIMER),
    )


def build_comparison(
    records: Sequence[ContactRecord], period: Period, now: datetime
) -> PeriodComparison:
    """
    Current period versus an approximate previous period.

    The previous set is the first half of the fetched rows rather than a
    query for the real prior window; the remote path does query it.
    """
    start = current_period_start(now, period)
    current = _stats([r for r in records if r.created_at >= start])
    previous = _stats(records[: len(records) // 2])

    return PeriodComparison(
        current=current,
        previous=previous,
        changes=PeriodChanges(
            total=calculate_change(current.total, previous.total),
            new_convert=calculate_change(current.new_convert, previous.new_convert),
            first_timer=calculate_change(current.first_timer, previous.first_timer),
        ),
    )


def build_summary(records: Sequence[ContactRecord]) -> ContactSummary:
    stats = _stats(records)
    return ContactSummary(
        total_contacts=stats.total,
        new_converts=stats.new_convert,
        first_timers=stats.first_timer,
        conversion_rate=stats.new_convert / stats.total * 100 if stats.total else 0.0,
        average_per_month=stats.total / AVERAGE_MONTHS,
    )


def aggregate_locally(
    records: Sequence[ContactRecord], period: Period, now: datetime
) -> AggregationResult:
    return AggregationResult(
        time_series=build_time_series(records, period, now),
        distribution=build_distribution(records),
        comparison=build_comparison(records, period, now),
        summary=build_summary(records),
    )
