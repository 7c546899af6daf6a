"""
Period resolver.

Pure functions of (now, period) that turn a period keyword into concrete
timestamp windows. Calendar arithmetic uses relativedelta, so stepping
back a month from the 31st lands on the last day of the shorter month.
"""

from datetime import datetime

from dateutil.relativedelta import relativedelta

from ..domain.models import Period, PeriodWindow

BUCKET_COUNTS = {
    Period.WEEKLY: 12,
    Period.MONTHLY: 12,
    Period.YEARLY: 5,
}

_STEPS = {
    Period.WEEKLY: relativedelta(weeks=1),
    Period.MONTHLY: relativedelta(months=1),
    Period.YEARLY: relativedelta(years=1),
}


def period_step(period: Period | str | None, count: int = 1) -> relativedelta:
    """Length of `count` periods of the given granularity."""
    return _STEPS[Period.parse(period)] * count


def date_range(now: datetime, period: Period | str | None) -> PeriodWindow:
    """Full lookback window: 12 weeks, 12 months or 5 years ending at now."""
    resolved = Period.parse(period)
    return PeriodWindow(
        start=now - period_step(resolved, BUCKET_COUNTS[resolved]),
        end=now,
        period=resolved,
    )


def current_period_start(now: datetime, period: Period | str | None) -> datetime:
    """Start of the single most recent period."""
    return now - period_step(period)


def current_date_range(now: datetime, period: Period | str | None) -> PeriodWindow:
    resolved = Period.parse(period)
    return PeriodWindow(start=current_period_start(now, resolved), end=now, period=resolved)


def previous_date_range(now: datetime, period: Period | str | None) -> PeriodWindow:
    """The period immediately before the current one, ending where it starts."""
    resolved = Period.parse(period)
    return PeriodWindow(
        start=now - period_step(resolved, 2),
        end=current_period_start(now, resolved),
        period=resolved,
    )
