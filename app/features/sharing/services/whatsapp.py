"""
WhatsApp share message.

Builds a plain-text summary of filtered contacts, grouped by district,
using WhatsApp's *bold* markup.
"""

import re
from datetime import date, datetime
from typing import Any

from app.utils.date_filters import period_label

UNKNOWN_DISTRICT = "Unknown District"
EMPTY_MESSAGE = "📭 No contacts available for the selected criteria."
DIVIDER = "━" * 16

EXCLUDED_KEYS = frozenset(
    {
        "createdAt",
        "prayerPoint",
        "serviceType",
        "contactType",
        "contactDate",
        "id",
        "firstName",
        "lastName",
        "district",
    }
)

_CAPITAL = re.compile(r"([A-Z])")


def format_key_name(key: str) -> str:
    """camelCase column name to a readable label: phoneNumber -> Phone Number."""
    spaced = _CAPITAL.sub(r" \1", key)
    return (spaced[:1].upper() + spaced[1:]).strip()


def _display(value: Any) -> Any:
    """Render a column value the way it reads in the JSON API."""
    if value is None or value == "":
        return "N/A"
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _format_record(index: int, record: dict[str, Any]) -> str:
    full_name = " ".join(part for part in (record.get("firstName"), record.get("lastName")) if part)
    lines = [f"*{index}.* *{full_name or 'N/A'}*"]
    for key, value in record.items():
        if key in EXCLUDED_KEYS:
            continue
        lines.append(f"   {format_key_name(key)}: {_display(value)}")
    return "\n".join(lines).strip()


def group_by_district(contacts: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Group preserving input order within each district; districts sorted A-Z."""
    groups: dict[str, list[dict[str, Any]]] = {}
    for contact in contacts:
        groups.setdefault(contact.get("district") or UNKNOWN_DISTRICT, []).append(contact)
    return {district: groups[district] for district in sorted(groups, key=str.casefold)}


def build_share_message(contacts: list[dict[str, Any]], period: str | None) -> str:
    count = len(contacts)
    header = (
        "*📋 Contacts Share Summary*\n"
        f"*📅 Period:* {period_label(period)}\n"
        f"*📊 Found:* {count} contact{'' if count == 1 else 's'}\n"
        "*📍 Sorted by:* District (A-Z)\n\n"
    )

    if not contacts:
        return header + EMPTY_MESSAGE

    sections = []
    for district, members in group_by_district(contacts).items():
        records = "\n\n".join(_format_record(i, record) for i, record in enumerate(members, start=1))
        sections.append(f"*🏘️ {district}*\n{DIVIDER}\n{records}")

    return header + "\n\n".join(sections)
