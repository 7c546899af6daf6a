"""
Domain models for the statistics feature.

Plain dataclasses describing the values that flow through the pipeline:
the period keyword, derived windows, the slice of a contact row the
aggregation reads, and the per-request aggregation result. None of them
are persisted.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

NEW_CONVERT = "new convert"
FIRST_TIMER = "first timer"
UNKNOWN = "unknown"


class Period(str, Enum):
    """Granularity and lookback length of the statistics window."""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"

    @classmethod
    def parse(cls, value: "Period | str | None") -> "Period":
        """Map a period keyword to a Period; anything unrecognized is monthly."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MONTHLY

    @property
    def label(self) -> str:
        return {
            Period.WEEKLY: "This Week",
            Period.MONTHLY: "This Month",
            Period.YEARLY: "This Year",
        }[self]


@dataclass(frozen=True, slots=True)
class PeriodWindow:
    """Half-open [start, end) timestamp window."""

    start: datetime
    end: datetime
    period: Period


def _as_utc(value: datetime | str) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True, slots=True)
class ContactRecord:
    """The columns of a contacts row the aggregation reads."""

    id: str
    created_at: datetime
    contact_type: str | None = None
    service_type: str | None = None
    gender: str | None = None
    district: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "ContactRecord":
        return cls(
            id=str(row["id"]),
            created_at=_as_utc(row["createdAt"]),
            contact_type=row.get("contactType"),
            service_type=row.get("serviceType"),
            gender=row.get("gender"),
            district=row.get("district"),
        )


@dataclass(slots=True)
class TimeSeriesPoint:
    period: str
    new_convert: int = 0
    first_timer: int = 0
    total: int = 0
    date: str = ""


@dataclass(slots=True)
class CategoryDistribution:
    """Value-to-count maps per categorical attribute, in first-seen order."""

    contact_type: dict[str, int] = field(default_factory=dict)
    service_type: dict[str, int] = field(default_factory=dict)
    gender: dict[str, int] = field(default_factory=dict)
    district: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PeriodStats:
    total: int = 0
    new_convert: int = 0
    first_timer: int = 0


@dataclass(frozen=True, slots=True)
class PeriodChanges:
    """Percent change per counter, current versus previous."""

    total: float = 0.0
    new_convert: float = 0.0
    first_timer: float = 0.0


@dataclass(frozen=True, slots=True)
class PeriodComparison:
    current: PeriodStats
    previous: PeriodStats
    changes: PeriodChanges


@dataclass(frozen=True, slots=True)
class ContactSummary:
    total_contacts: int = 0
    new_converts: int = 0
    first_timers: int = 0
    conversion_rate: float = 0.0
    average_per_month: float = 0.0


@dataclass(slots=True)
class AggregationResult:
    """Output of either aggregation strategy, before formatting."""

    time_series: list[TimeSeriesPoint]
    distribution: CategoryDistribution
    comparison: PeriodComparison
    summary: ContactSummary


@dataclass(frozen=True, slots=True)
class StatisticsFilters:
    """Optional equality filters; None, "" and "all" mean no filter."""

    contact_type: str | None = None
    service_type: str | None = None
    district: str | None = None

    def active(self) -> dict[str, str]:
        """Column name to required value, for the filters that are set."""
        columns = {
            "contactType": self.contact_type,
            "serviceType": self.service_type,
            "district": self.district,
        }
        return {column: value for column, value in columns.items() if value and value != "all"}

    def has_active_filters(self) -> bool:
        return bool(self.active())


@dataclass(frozen=True, slots=True)
class StatisticsQuery:
    """Request-scoped input: everything the pipeline depends on."""

    period: Period
    filters: StatisticsFilters
    now: datetime
