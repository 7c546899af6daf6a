"""
Contact service.

Business rules on top of ContactRepository: paging for the dashboard
table, not-found handling, immutable createdAt, cascading delete and
feedback attached to an existing contact.
"""

import math
from contextlib import contextmanager
from typing import Any

from app.config import settings
from app.db.helpers import DatabaseError
from app.infrastructure.observability.logging import get_logger
from app.models.api.contact_request import (
    ContactCreateRequest,
    ContactUpdateRequest,
    FeedbackCreateRequest,
)
from app.utils.date_filters import resolve_date_window

from .repository import ContactRepository

logger = get_logger(__name__)

MAX_PAGE_SIZE = 100

# Postgres invalid_text_representation, raised when an id is not a uuid
INVALID_TEXT_REPRESENTATION = "22P02"


class ContactNotFoundError(LookupError):
    def __init__(self, contact_id: str):
        super().__init__(f"Contact {contact_id} not found")
        self.contact_id = contact_id


@contextmanager
def _contact_lookup(contact_id: str):
    """Treat an id the contacts table cannot parse as a missing contact."""
    try:
        yield
    except DatabaseError as e:
        if e.sqlstate == INVALID_TEXT_REPRESENTATION:
            raise ContactNotFoundError(contact_id) from e
        raise


class ContactService:
    async def create_contact(self, payload: ContactCreateRequest) -> dict[str, Any]:
        row = await ContactRepository.insert_contact(payload.to_columns())
        logger.info(
            "Contact created",
            contact_id=str(row["id"]) if row else None,
            contact_type=payload.contact_type,
            service_type=payload.service_type,
        )
        return row

    async def list_contacts(
        self,
        *,
        search: str | None = None,
        period: str | None = None,
        start: str | None = None,
        end: str | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> dict[str, Any]:
        """One page of contacts plus paging metadata."""
        window = resolve_date_window(period, start, end)
        page = max(page, 1)
        page_size = min(max(page_size or settings.CONTACTS_PAGE_SIZE, 1), MAX_PAGE_SIZE)

        rows, total = await ContactRepository.list_contacts(
            search=(search or "").strip() or None,
            window=window,
            limit=page_size,
            offset=(page - 1) * page_size,
        )
        return {
            "items": rows,
            "total": total,
            "page": page,
            "page_size": page_size,
            "page_count": math.ceil(total / page_size) if total else 0,
        }

    async def get_contact(self, contact_id: str) -> dict[str, Any]:
        with _contact_lookup(contact_id):
            row = await ContactRepository.get_contact(contact_id)
        if not row:
            raise ContactNotFoundError(contact_id)
        return row

    async def update_contact(self, contact_id: str, payload: ContactUpdateRequest) -> dict[str, Any]:
        values = payload.to_columns()
        if not values:
            return await self.get_contact(contact_id)

        with _contact_lookup(contact_id):
            row = await ContactRepository.update_contact(contact_id, values)
        if not row:
            raise ContactNotFoundError(contact_id)

        logger.info("Contact updated", contact_id=contact_id, fields=sorted(values))
        return row

    async def delete_contact(self, contact_id: str) -> None:
        with _contact_lookup(contact_id):
            deleted = await ContactRepository.delete_contact_with_feedback(contact_id)
        if not deleted:
            raise ContactNotFoundError(contact_id)
        logger.info("Contact deleted with feedback", contact_id=contact_id)

    async def add_feedback(self, payload: FeedbackCreateRequest) -> dict[str, Any]:
        await self.get_contact(payload.contact_id)
        row = await ContactRepository.insert_feedback(
            payload.contact_id, payload.feedback, payload.initiator, payload.date_created
        )
        logger.info("Feedback added", contact_id=payload.contact_id, initiator=payload.initiator)
        return row

    async def get_contact_with_feedback(self, contact_id: str) -> dict[str, Any]:
        contact = await self.get_contact(contact_id)
        return {**contact, "feedback": await ContactRepository.list_feedback(contact_id)}


contact_service = ContactService()
