"""
Repository helpers for contacts and their feedback notes.

Column names are camelCase quoted identifiers in the contacts table and
snake_case in the feedback table. Dynamic column lists only ever come
from request model aliases.
"""

from datetime import datetime
from typing import Any

from app.db.helpers import execute_transaction, fetch_all, fetch_one, fetch_val
from app.infrastructure.observability.logging import get_logger
from app.utils.date_filters import DateWindow

logger = get_logger(__name__)

SEARCHABLE_COLUMNS = ("firstName", "lastName", "address", "phone", "prayerPoint")


def _quote(column: str) -> str:
    return '"' + column.replace('"', '""') + '"'


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _where(clauses: list[str]) -> str:
    return f"WHERE {' AND '.join(clauses)}" if clauses else ""


class ContactRepository:
    """Raw SQL helpers for the contacts and feedback tables."""

    @classmethod
    async def insert_contact(cls, values: dict[str, Any]) -> dict[str, Any]:
        columns = list(values)
        query = f"""
            INSERT INTO contacts ({", ".join(_quote(c) for c in columns)})
            VALUES ({", ".join(["%s"] * len(columns))})
            RETURNING *
        """
        return await fetch_one(query, tuple(values[c] for c in columns))

    @classmethod
    async def get_contact(cls, contact_id: str) -> dict[str, Any] | None:
        return await fetch_one("SELECT * FROM contacts WHERE id = %s", (contact_id,))

    @classmethod
    async def list_contacts(
        cls,
        *,
        search: str | None = None,
        window: DateWindow | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> tuple[list[dict[str, Any]], int]:
        """Dashboard listing, newest contactDate first. Returns (rows, total)."""
        clauses: list[str] = []
        params: list[Any] = []

        if search:
            pattern = _like_pattern(search)
            clauses.append(
                "(" + " OR ".join(f"{_quote(c)} ILIKE %s" for c in SEARCHABLE_COLUMNS) + ")"
            )
            params.extend([pattern] * len(SEARCHABLE_COLUMNS))

        if window:
            clauses.append('"createdAt" >= %s AND "createdAt" <= %s')
            params.extend([window.start, window.end])

        where = _where(clauses)
        total = await fetch_val(f"SELECT COUNT(*) FROM contacts {where}", tuple(params))

        query = f"""
            SELECT * FROM contacts
            {where}
            ORDER BY "contactDate" DESC NULLS LAST, "createdAt" DESC
        """
        page_params = list(params)
        if limit is not None:
            query += " LIMIT %s OFFSET %s"
            page_params.extend([limit, offset])

        rows = await fetch_all(query, tuple(page_params))
        return rows, int(total or 0)

    @classmethod
    async def fetch_for_export(
        cls,
        *,
        phone_search: str | None = None,
        window: DateWindow | None = None,
        order_by_district: bool = False,
    ) -> list[dict[str, Any]]:
        """Rows for the Excel export and share endpoints; search matches phone only."""
        clauses: list[str] = []
        params: list[Any] = []

        if phone_search:
            clauses.append("phone ILIKE %s")
            params.append(_like_pattern(phone_search))

        if window:
            clauses.append('"createdAt" >= %s AND "createdAt" <= %s')
            params.extend([window.start, window.end])

        order = (
            'ORDER BY district ASC NULLS LAST, "createdAt" DESC'
            if order_by_district
            else 'ORDER BY "createdAt" ASC'
        )
        return await fetch_all(f"SELECT * FROM contacts {_where(clauses)} {order}", tuple(params))

    @classmethod
    async def update_contact(cls, contact_id: str, values: dict[str, Any]) -> dict[str, Any] | None:
        columns = list(values)
        assignments = ", ".join(f"{_quote(c)} = %s" for c in columns)
        query = f"UPDATE contacts SET {assignments} WHERE id = %s RETURNING *"
        return await fetch_one(query, (*[values[c] for c in columns], contact_id))

    @classmethod
    async def delete_contact_with_feedback(cls, contact_id: str) -> bool:
        """Delete a contact and its feedback atomically. False when no contact matched."""
        _, deleted_contacts = await execute_transaction(
            [
                ("DELETE FROM feedback WHERE contact_id = %s", (contact_id,)),
                ("DELETE FROM contacts WHERE id = %s", (contact_id,)),
            ]
        )
        return deleted_contacts > 0

    @classmethod
    async def insert_feedback(
        cls, contact_id: str, feedback: str, initiator: str, date_created: datetime
    ) -> dict[str, Any]:
        query = """
            INSERT INTO feedback (contact_id, feedback, initiator, date_created)
            VALUES (%s, %s, %s, %s)
            RETURNING *
        """
        return await fetch_one(query, (contact_id, feedback, initiator, date_created))

    @classmethod
    async def list_feedback(cls, contact_id: str) -> list[dict[str, Any]]:
        query = """
            SELECT * FROM feedback
            WHERE contact_id = %s
            ORDER BY date_created ASC
        """
        return await fetch_all(query, (contact_id,))
