"""
Statistics routes.

GET /api/statistics?period=weekly|monthly|yearly&filters={JSON}

Any failure (malformed filters, database error) is terminal for the
request and answered with 500 {"error", "details"}; no partial response.
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.auth.verify import auth_dependency
from app.infrastructure.observability.logging import get_logger
from app.models.api.statistics_response import StatisticsErrorResponse, StatisticsResponse

from ..services.statistics_service import parse_filters, statistics_service

router = APIRouter(prefix="/api/statistics", tags=["statistics"])
logger = get_logger(__name__)


@router.get(
    "",
    response_model=StatisticsResponse,
    responses={500: {"model": StatisticsErrorResponse}},
)
async def get_statistics(
    period: str = Query(default="monthly", description="weekly, monthly or yearly"),
    filters: str = Query(default="{}", description="JSON: {contactType?, serviceType?, district?}"),
    claims: dict = Depends(auth_dependency),
):
    try:
        parsed_filters = parse_filters(filters)
        return await statistics_service.get_statistics(period, parsed_filters)
    except Exception as e:
        logger.exception(
            "Statistics request failed",
            period=period,
            filters=filters,
            user_id=claims.get("sub"),
            error_type=type(e).__name__,
        )
        return JSONResponse(
            status_code=500,
            content=StatisticsErrorResponse(
                error="Failed to fetch statistics",
                details=str(e) or type(e).__name__,
            ).model_dump(),
        )
