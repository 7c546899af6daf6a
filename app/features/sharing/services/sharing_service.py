"""
Export and share orchestration: resolve the period window, load the
matching contacts and hand them to the workbook or message builders.
"""

from datetime import datetime

from app.features.contacts.repository import ContactRepository
from app.infrastructure.observability.logging import get_logger
from app.utils.date_filters import resolve_date_window

from .excel_export import build_all_details_workbook, build_phone_numbers_workbook
from .whatsapp import build_share_message

logger = get_logger(__name__)


class SharingService:
    async def _contacts(
        self,
        period: str | None,
        search: str | None,
        start: str | None,
        end: str | None,
        now: datetime | None = None,
        order_by_district: bool = False,
    ) -> list[dict]:
        window = resolve_date_window(period, start, end, now=now)
        return await ContactRepository.fetch_for_export(
            phone_search=(search or "").strip() or None,
            window=window,
            order_by_district=order_by_district,
        )

    async def export_all_details(
        self,
        period: str | None = None,
        search: str | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> bytes:
        rows = await self._contacts(period, search, start, end)
        logger.info("Exporting contact details", period=period or "all", rows=len(rows))
        return build_all_details_workbook(rows)

    async def export_phone_numbers(
        self,
        period: str | None = None,
        search: str | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> bytes:
        rows = await self._contacts(period, search, start, end)
        logger.info("Exporting phone numbers", period=period or "all", rows=len(rows))
        return build_phone_numbers_workbook(rows)

    async def share_message(
        self,
        period: str | None = None,
        search: str | None = None,
        start: str | None = None,
        end: str | None = None,
    ) -> str:
        rows = await self._contacts(period, search, start, end, order_by_district=True)
        logger.info("Built share message", period=period or "all", contacts=len(rows))
        return build_share_message(rows, period)


sharing_service = SharingService()
