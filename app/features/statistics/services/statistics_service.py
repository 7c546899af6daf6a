"""
Statistics service.

Entry point of the statistics pipeline: parses the request boundary
(period keyword, filters JSON), picks the aggregation strategy and
formats the result.
"""

from datetime import UTC, datetime

from pydantic import ValidationError

from app.infrastructure.observability.logging import get_logger
from app.models.api.statistics_request import StatisticsFiltersPayload
from app.models.api.statistics_response import StatisticsResponse

from ..domain.models import Period, StatisticsFilters, StatisticsQuery
from ..pipeline.formatter import format_response
from ..repository import StatisticsRepository
from .strategies import AggregationStrategy, LocalAggregationStrategy, RemoteAggregationStrategy

logger = get_logger(__name__)


class StatisticsRequestError(ValueError):
    """Raised when the statistics request parameters cannot be parsed."""


def parse_filters(raw: str | None) -> StatisticsFilters:
    """Parse the `filters` query parameter (a JSON object) into StatisticsFilters."""
    if raw is None or not raw.strip():
        return StatisticsFilters()
    try:
        return StatisticsFiltersPayload.model_validate_json(raw).to_domain()
    except ValidationError as e:
        raise StatisticsRequestError(f"Invalid filters: {e.errors()[0]['msg']}") from e


class StatisticsService:
    def __init__(self, repository: StatisticsRepository | None = None):
        self.repository = repository or StatisticsRepository()

    def select_strategy(self, filters: StatisticsFilters) -> AggregationStrategy:
        if filters.has_active_filters():
            return LocalAggregationStrategy(self.repository)
        return RemoteAggregationStrategy(self.repository)

    async def get_statistics(
        self,
        period: Period | str | None,
        filters: StatisticsFilters,
        now: datetime | None = None,
    ) -> StatisticsResponse:
        query = StatisticsQuery(
            period=Period.parse(period),
            filters=filters,
            now=now or datetime.now(UTC),
        )
        strategy = self.select_strategy(filters)

        logger.info(
            "Computing statistics",
            period=query.period.value,
            filters=filters.active(),
            strategy=strategy.name,
        )

        result = await strategy.aggregate(query)
        response = format_response(result, query.period)

        logger.info(
            "Statistics computed",
            strategy=strategy.name,
            time_series_count=len(response.time_series),
            total_contacts=response.total_contacts,
        )
        return response


statistics_service = StatisticsService()
