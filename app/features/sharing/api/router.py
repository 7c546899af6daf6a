"""
Export and share routes.

    GET /api/export/all-details    every column, one row per contact
    GET /api/export/phone-numbers  phone column only
    GET /api/share/filter          WhatsApp-ready summary text
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel

from app.auth.verify import auth_dependency
from app.db.helpers import DatabaseError
from app.infrastructure.observability.logging import get_logger
from app.utils.date_filters import DateRangeError

from ..services import XLSX_MEDIA_TYPE, sharing_service

router = APIRouter(prefix="/api", tags=["sharing"], dependencies=[Depends(auth_dependency)])
logger = get_logger(__name__)


class ShareMessageResponse(BaseModel):
    message: str


def _xlsx(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _translate(e: Exception) -> HTTPException:
    if isinstance(e, DateRangeError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    logger.error("Export query failed", error=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("/export/all-details")
async def export_all_details(
    period: str = Query(default="all"),
    search: str | None = Query(default=None, description="Phone number substring"),
    start: str | None = None,
    end: str | None = None,
):
    try:
        content = await sharing_service.export_all_details(period, search, start, end)
    except (DateRangeError, DatabaseError) as e:
        raise _translate(e) from e
    return _xlsx(content, "all_details.xlsx")


@router.get("/export/phone-numbers")
async def export_phone_numbers(
    period: str = Query(default="all"),
    search: str | None = Query(default=None, description="Phone number substring"),
    start: str | None = None,
    end: str | None = None,
):
    try:
        content = await sharing_service.export_phone_numbers(period, search, start, end)
    except (DateRangeError, DatabaseError) as e:
        raise _translate(e) from e
    return _xlsx(content, "phone_numbers.xlsx")


@router.get("/share/filter", response_model=ShareMessageResponse)
async def share_filter(
    period: str = Query(default="all"),
    search: str | None = Query(default=None, description="Phone number substring"),
    start: str | None = None,
    end: str | None = None,
):
    try:
        message = await sharing_service.share_message(period, search, start, end)
    except (DateRangeError, DatabaseError) as e:
        raise _translate(e) from e
    return ShareMessageResponse(message=message)
