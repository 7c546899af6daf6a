"""
Record source for the statistics feature.

Two retrieval modes against the Supabase Postgres database:
- raw contact rows for a createdAt window plus equality filters
- the four pre-aggregated SQL functions (trends, distributions,
  period comparison, dashboard summary)

Failures surface as DatabaseError; nothing is retried here.
"""

from typing import Any

from app.db.helpers import fetch_all, fetch_val
from app.infrastructure.observability.logging import get_logger

from .domain.models import ContactRecord, PeriodWindow, StatisticsFilters

logger = get_logger(__name__)


class StatisticsRepository:
    """Raw SQL helpers for statistics."""

    async def fetch_contacts(
        self, window: PeriodWindow, filters: StatisticsFilters
    ) -> list[ContactRecord]:
        clauses = ['"createdAt" >= %s', '"createdAt" <= %s']
        params: list[Any] = [window.start, window.end]
        # Column names come from a fixed whitelist in StatisticsFilters.active()
        for column, value in filters.active().items():
            clauses.append(f'"{column}" = %s')
            params.append(value)

        query = f"""
            SELECT id, "createdAt", "contactType", "serviceType", gender, district
            FROM contacts
            WHERE {" AND ".join(clauses)}
            ORDER BY "createdAt" ASC
        """

        rows = await fetch_all(query, tuple(params))
        logger.debug(
            "Fetched filtered contacts",
            row_count=len(rows),
            filters=filters.active(),
            period=window.period.value,
        )
        return [ContactRecord.from_row(row) for row in rows]

    async def fetch_contact_trends(self, window: PeriodWindow) -> list[dict[str, Any]]:
        query = """
            SELECT period_label, new_convert_count, first_timer_count, total_count, period_date
            FROM get_contact_trends(start_date => %s, end_date => %s, period_type => %s)
        """
        return await fetch_all(query, (window.start, window.end, window.period.value))

    async def fetch_contact_distributions(self, window: PeriodWindow) -> dict[str, Any] | None:
        query = "SELECT get_contact_distributions(start_date => %s, end_date => %s) AS result"
        return await fetch_val(query, (window.start, window.end))

    async def fetch_period_comparison(
        self, current: PeriodWindow, previous: PeriodWindow
    ) -> dict[str, Any] | None:
        query = """
            SELECT get_period_comparison(
                current_start => %s,
                current_end => %s,
                previous_start => %s,
                previous_end => %s
            ) AS result
        """
        return await fetch_val(query, (current.start, current.end, previous.start, previous.end))

    async def fetch_dashboard_summary(self, window: PeriodWindow) -> dict[str, Any] | None:
        query = "SELECT get_dashboard_summary(start_date => %s, end_date => %s) AS result"
        return await fetch_val(query, (window.start, window.end))
