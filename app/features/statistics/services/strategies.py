"""
Aggregation strategies.

Both strategies take a StatisticsQuery and return an AggregationResult of
the same shape. The local strategy fetches filtered rows and aggregates
in memory; the remote strategy delegates to the database's
pre-aggregated SQL functions.
"""

from abc import ABC, abstractmethod

from app.infrastructure.observability.logging import get_logger

from ..domain.models import AggregationResult, StatisticsQuery
from ..pipeline.formatter import (
    comparison_from_payload,
    distribution_from_payload,
    summary_from_payload,
    time_series_from_rows,
)
from ..pipeline.local_aggregation import aggregate_locally
from ..pipeline.periods import current_date_range, date_range, previous_date_range
from ..repository import StatisticsRepository

logger = get_logger(__name__)


class AggregationStrategy(ABC):
    name: str

    def __init__(self, repository: StatisticsRepository):
        self.repository = repository

    @abstractmethod
    async def aggregate(self, query: StatisticsQuery) -> AggregationResult:
        raise NotImplementedError


class LocalAggregationStrategy(AggregationStrategy):
    name = "local"

    async def aggregate(self, query: StatisticsQuery) -> AggregationResult:
        window = date_range(query.now, query.period)
        records = await self.repository.fetch_contacts(window, query.filters)
        return aggregate_locally(records, query.period, query.now)


class RemoteAggregationStrategy(AggregationStrategy):
    name = "remote"

    async def aggregate(self, query: StatisticsQuery) -> AggregationResult:
        window = date_range(query.now, query.period)

        # Sequential and fail-fast: the first error aborts the request
        trend_rows = await self.repository.fetch_contact_trends(window)
        distribution = await self.repository.fetch_contact_distributions(window)
        comparison = await self.repository.fetch_period_comparison(
            current_date_range(query.now, query.period),
            previous_date_range(query.now, query.period),
        )
        summary = await self.repository.fetch_dashboard_summary(window)

        logger.debug(
            "Remote aggregates fetched",
            period=query.period.value,
            trend_rows=len(trend_rows or []),
        )

        return AggregationResult(
            time_series=time_series_from_rows(trend_rows),
            distribution=distribution_from_payload(distribution),
            comparison=comparison_from_payload(comparison),
            summary=summary_from_payload(summary),
        )
