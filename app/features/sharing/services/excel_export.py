"""
Excel workbooks for the contact export endpoints.

Workbooks are built in memory with openpyxl and returned as bytes.
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from io import BytesIO
from typing import Any

from openpyxl import Workbook

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
NO_DATA_MESSAGE = "No data available"

ALL_DETAILS_SHEET = "AllDetails"
PHONE_NUMBERS_SHEET = "PhoneNumbers"
PHONE_NUMBER_HEADER = "Phone Number"


def cell_value(value: Any) -> Any:
    """Coerce a database value into something openpyxl can write."""
    if value is None or isinstance(value, (str, bool, int, float, Decimal)):
        return value
    if isinstance(value, datetime):
        # Excel has no timezone support
        if value.tzinfo is not None:
            return value.astimezone(UTC).replace(tzinfo=None)
        return value
    if isinstance(value, date):
        return value
    return str(value)


def _to_bytes(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_all_details_workbook(rows: list[dict[str, Any]]) -> bytes:
    """One sheet, header row from the first row's keys, one row per contact."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = ALL_DETAILS_SHEET

    if not rows:
        sheet.append([NO_DATA_MESSAGE])
        return _to_bytes(workbook)

    headers = list(rows[0].keys())
    sheet.append(headers)
    for row in rows:
        sheet.append([cell_value(row.get(header)) for header in headers])

    return _to_bytes(workbook)


def build_phone_numbers_workbook(rows: list[dict[str, Any]]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = PHONE_NUMBERS_SHEET

    sheet.append([PHONE_NUMBER_HEADER])
    for row in rows:
        sheet.append([cell_value(row.get("phone"))])

    return _to_bytes(workbook)
