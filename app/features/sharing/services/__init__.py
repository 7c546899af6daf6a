from .excel_export import (
    XLSX_MEDIA_TYPE,
    build_all_details_workbook,
    build_phone_numbers_workbook,
    cell_value,
)
from .sharing_service import SharingService, sharing_service
from .whatsapp import build_share_message, format_key_name, group_by_district

__all__ = [
    "XLSX_MEDIA_TYPE",
    "build_all_details_workbook",
    "build_phone_numbers_workbook",
    "cell_value",
    "SharingService",
    "sharing_service",
    "build_share_message",
    "format_key_name",
    "group_by_district",
]
