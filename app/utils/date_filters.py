# app/utils/date_filters.py
"""
Calendar period filters shared by the contacts table, Excel export and
WhatsApp share endpoints.

Periods: day, week (Sunday start), month, year, custom (explicit start
and end), anything else means all time. Windows are inclusive on both
ends and computed in UTC.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

PERIOD_LABELS = {
    "day": "Today",
    "week": "This Week",
    "month": "This Month",
    "year": "This Year",
    "custom": "Custom Range",
}


class DateRangeError(ValueError):
    """Invalid custom date range; maps to HTTP 400."""


@dataclass(frozen=True, slots=True)
class DateWindow:
    start: datetime
    end: datetime


def period_label(period: str | None) -> str:
    return PERIOD_LABELS.get(period or "all", "All Time")


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min, tzinfo=UTC)


def _end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.max, tzinfo=UTC)


def _parse_custom(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise DateRangeError("Invalid date format provided for custom date range.") from e
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def resolve_date_window(
    period: str | None,
    start: str | None = None,
    end: str | None = None,
    now: datetime | None = None,
) -> DateWindow | None:
    """
    Resolve a calendar period keyword to an inclusive window.

    Returns None for "all" and unknown keywords. Raises DateRangeError
    for an incomplete, unparseable or inverted custom range.
    """
    now = (now or datetime.now(UTC)).astimezone(UTC)

    if period == "day":
        return DateWindow(_start_of_day(now), _end_of_day(now))

    if period == "week":
        # weekday(): Monday=0 .. Sunday=6
        week_start = _start_of_day(now) - timedelta(days=(now.weekday() + 1) % 7)
        return DateWindow(week_start, _end_of_day(week_start + timedelta(days=6)))

    if period == "month":
        month_start = _start_of_day(now.replace(day=1))
        month_end = month_start + relativedelta(months=1, microseconds=-1)
        return DateWindow(month_start, month_end)

    if period == "year":
        year_start = _start_of_day(now.replace(month=1, day=1))
        return DateWindow(year_start, _end_of_day(now.replace(month=12, day=31)))

    if period == "custom":
        if not start or not end:
            raise DateRangeError("Custom date range parameters 'start' and 'end' are required.")
        window = DateWindow(_parse_custom(start), _parse_custom(end))
        if window.start > window.end:
            raise DateRangeError("Start date must be before or equal to end date.")
        return window

    return None
