from datetime import UTC, datetime, timedelta

import pytest

from app.features.statistics.domain.models import Period
from app.features.statistics.pipeline.periods import (
    BUCKET_COUNTS,
    current_date_range,
    current_period_start,
    date_range,
    previous_date_range,
)

NOW = datetime(2026, 10, 15, 12, 0, tzinfo=UTC)


def test_lookback_windows_end_at_now():
    weekly = date_range(NOW, "weekly")
    monthly = date_range(NOW, "monthly")
    yearly = date_range(NOW, "yearly")

    assert weekly.start == NOW - timedelta(weeks=12)
    assert monthly.start == datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    assert yearly.start == datetime(2021, 10, 15, 12, 0, tzinfo=UTC)
    assert weekly.end == monthly.end == yearly.end == NOW


def test_bucket_counts_per_period():
    assert BUCKET_COUNTS == {Period.WEEKLY: 12, Period.MONTHLY: 12, Period.YEARLY: 5}


@pytest.mark.parametrize("period", ["weekly", "monthly", "yearly"])
def test_previous_window_ends_where_current_starts(period):
    previous = previous_date_range(NOW, period)
    current = current_date_range(NOW, period)

    assert previous.end == current.start == current_period_start(NOW, period)
    assert previous.start < previous.end < NOW


def test_monthly_previous_window():
    previous = previous_date_range(NOW, "monthly")

    assert previous.start == datetime(2026, 8, 15, 12, 0, tzinfo=UTC)
    assert previous.end == datetime(2026, 9, 15, 12, 0, tzinfo=UTC)


@pytest.mark.parametrize("value", ["daily", "", None, "bogus"])
def test_unknown_period_resolves_to_monthly(value):
    assert Period.parse(value) is Period.MONTHLY
    assert date_range(NOW, value) == date_range(NOW, "monthly")


def test_period_keyword_is_case_insensitive():
    assert Period.parse("Weekly") is Period.WEEKLY
    assert Period.parse(" YEARLY ") is Period.YEARLY


def test_month_step_clamps_to_shorter_month():
    end_of_march = datetime(2026, 3, 31, 9, 0, tzinfo=UTC)

    assert current_period_start(end_of_march, "monthly") == datetime(2026, 2, 28, 9, 0, tzinfo=UTC)
