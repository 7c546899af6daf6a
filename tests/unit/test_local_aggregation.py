from datetime import UTC, datetime, timedelta

import pytest

from app.features.statistics.domain.models import (
    FIRST_TIMER,
    NEW_CONVERT,
    ContactRecord,
    Period,
)
from app.features.statistics.pipeline.local_aggregation import (
    aggregate_locally,
    build_comparison,
    build_distribution,
    build_time_series,
    calculate_change,
    month_label,
)
from app.features.statistics.pipeline.periods import BUCKET_COUNTS

NOW = datetime(2026, 10, 15, 12, 0, tzinfo=UTC)


def _record(n: int, created_at: datetime, contact_type: str | None = FIRST_TIMER, **fields):
    return ContactRecord(id=f"c-{n}", created_at=created_at, contact_type=contact_type, **fields)


@pytest.mark.parametrize(
    ("current", "previous", "expected"),
    [
        (10, 0, 100.0),
        (0, 0, 0.0),
        (5, 10, -50.0),
        (15, 10, 50.0),
    ],
)
def test_calculate_change(current, previous, expected):
    assert calculate_change(current, previous) == expected


def test_month_label_is_locale_independent():
    assert month_label(datetime(2026, 10, 1, tzinfo=UTC)) == "Oct 26"
    assert month_label(datetime(2009, 1, 31, tzinfo=UTC)) == "Jan 09"


def test_monthly_series_with_three_recent_months():
    records = [
        _record(month * 10 + i, datetime(2026, month, 10, 8, i, tzinfo=UTC))
        for month in (8, 9, 10)
        for i in range(5)
    ]

    series = build_time_series(records, Period.MONTHLY, NOW)

    assert len(series) == 12
    assert series[0].period == "Nov 25"
    assert series[-1].period == "Oct 26"
    assert all(point.total == 0 for point in series[:9])
    assert [point.total for point in series[9:]] == [5, 5, 5]
    assert sum(point.total for point in series[9:]) == 15


def test_weekly_buckets_by_age_in_whole_weeks():
    records = [
        _record(1, NOW - timedelta(days=1), NEW_CONVERT),
        _record(2, NOW - timedelta(days=8)),
        _record(3, NOW - timedelta(weeks=11, days=6)),
        _record(4, NOW - timedelta(weeks=13)),
    ]

    series = build_time_series(records, Period.WEEKLY, NOW)

    assert [p.period for p in series] == [f"Week {n}" for n in range(1, 13)]
    assert series[-1].total == 1
    assert series[-1].new_convert == 1
    assert series[-2].first_timer == 1
    assert series[0].total == 1
    assert sum(p.total for p in series) == 3


def test_yearly_buckets_by_calendar_year():
    records = [
        _record(1, datetime(2022, 3, 1, tzinfo=UTC)),
        _record(2, datetime(2026, 1, 5, tzinfo=UTC), NEW_CONVERT),
        _record(3, datetime(2026, 9, 5, tzinfo=UTC)),
    ]

    series = build_time_series(records, Period.YEARLY, NOW)

    assert [p.period for p in series] == ["2022", "2023", "2024", "2025", "2026"]
    assert [p.total for p in series] == [1, 0, 0, 0, 2]
    assert series[-1].new_convert == 1


def test_bucket_dates_ascend():
    for period in Period:
        dates = [p.date for p in build_time_series([], period, NOW)]
        assert dates == sorted(dates)
        assert dates[-1] == NOW.isoformat()


@pytest.mark.parametrize("period", list(Period))
def test_empty_record_set(period):
    result = aggregate_locally([], period, NOW)

    assert len(result.time_series) == BUCKET_COUNTS[period]
    assert all(p.total == p.new_convert == p.first_timer == 0 for p in result.time_series)
    assert result.summary.total_contacts == 0
    assert result.summary.conversion_rate == 0
    assert result.summary.average_per_month == 0
    assert result.comparison.changes.total == 0
    assert result.distribution.contact_type == {}


def test_distribution_counts_missing_values_as_unknown():
    records = [
        _record(1, NOW, NEW_CONVERT, gender="male", district="Central"),
        _record(2, NOW, FIRST_TIMER, gender=None, district="Central"),
        _record(3, NOW, None, gender="female", district=""),
    ]

    distribution = build_distribution(records)

    assert distribution.contact_type == {NEW_CONVERT: 1, FIRST_TIMER: 1, "unknown": 1}
    assert distribution.gender == {"male": 1, "unknown": 1, "female": 1}
    assert distribution.district == {"Central": 2, "unknown": 1}
    assert distribution.service_type == {"unknown": 3}
    for counts in (
        distribution.contact_type,
        distribution.service_type,
        distribution.gender,
        distribution.district,
    ):
        assert sum(counts.values()) == len(records)


def test_comparison_previous_is_first_half_of_rows():
    records = [
        _record(1, NOW - timedelta(days=70), NEW_CONVERT),
        _record(2, NOW - timedelta(days=50)),
        _record(3, NOW - timedelta(days=40)),
        _record(4, NOW - timedelta(days=5), NEW_CONVERT),
        _record(5, NOW - timedelta(days=3)),
        _record(6, NOW - timedelta(days=1)),
    ]

    comparison = build_comparison(records, Period.MONTHLY, NOW)

    assert comparison.current.total == 3
    assert comparison.current.new_convert == 1
    assert comparison.previous.total == 3
    assert comparison.previous.new_convert == 1
    assert comparison.changes.total == 0
    assert comparison.changes.first_timer == 0


def test_summary_rates():
    records = [_record(i, NOW - timedelta(days=i), NEW_CONVERT) for i in range(3)]
    records.append(_record(9, NOW - timedelta(days=9)))

    summary = aggregate_locally(records, Period.MONTHLY, NOW).summary

    assert summary.total_contacts == 4
    assert summary.new_converts == 3
    assert summary.first_timers == 1
    assert summary.conversion_rate == 75.0
    assert summary.average_per_month == pytest.approx(4 / 12)
