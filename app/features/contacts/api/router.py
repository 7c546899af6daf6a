"""
Contact and feedback routes.

All endpoints require a Supabase session token.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.auth.verify import auth_dependency
from app.db.helpers import DatabaseError
from app.infrastructure.observability.logging import get_logger
from app.models.api.contact_request import (
    ContactCreateRequest,
    ContactUpdateRequest,
    FeedbackCreateRequest,
)
from app.models.api.contact_response import ContactListResponse, ContactMutationResponse
from app.utils.date_filters import DateRangeError

from ..service import ContactNotFoundError, contact_service

router = APIRouter(prefix="/api/contacts", tags=["contacts"], dependencies=[Depends(auth_dependency)])
feedback_router = APIRouter(
    prefix="/api/feedbacks", tags=["feedback"], dependencies=[Depends(auth_dependency)]
)
logger = get_logger(__name__)


def _database_failure(e: DatabaseError) -> HTTPException:
    logger.error("Contact operation failed", operation=e.operation, error=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


def _not_found(e: ContactNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ContactMutationResponse)
async def create_contact(payload: ContactCreateRequest):
    try:
        row = await contact_service.create_contact(payload)
    except DatabaseError as e:
        raise _database_failure(e) from e
    return ContactMutationResponse(message="Contact added successfully", data=[row])


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    search: str | None = Query(default=None, description="Case-insensitive text search"),
    period: str = Query(default="all", description="all, day, week, month, year or custom"),
    start: str | None = Query(default=None, description="Custom range start (ISO date)"),
    end: str | None = Query(default=None, description="Custom range end (ISO date)"),
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1, le=100),
):
    try:
        result = await contact_service.list_contacts(
            search=search, period=period, start=start, end=end, page=page, page_size=page_size
        )
    except DateRangeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except DatabaseError as e:
        raise _database_failure(e) from e
    return ContactListResponse(**result)


@router.get("/{contact_id}")
async def get_contact(contact_id: str):
    try:
        return await contact_service.get_contact(contact_id)
    except ContactNotFoundError as e:
        raise _not_found(e) from e
    except DatabaseError as e:
        raise _database_failure(e) from e


@router.put("/{contact_id}", response_model=ContactMutationResponse)
async def update_contact(contact_id: str, payload: ContactUpdateRequest):
    try:
        row = await contact_service.update_contact(contact_id, payload)
    except ContactNotFoundError as e:
        raise _not_found(e) from e
    except DatabaseError as e:
        raise _database_failure(e) from e
    return ContactMutationResponse(message="Contact updated successfully", data=row)


@router.delete("/{contact_id}", response_model=ContactMutationResponse)
async def delete_contact(contact_id: str):
    try:
        await contact_service.delete_contact(contact_id)
    except ContactNotFoundError as e:
        raise _not_found(e) from e
    except DatabaseError as e:
        raise _database_failure(e) from e
    return ContactMutationResponse(message="Contact deleted successfully")


@feedback_router.post("", status_code=status.HTTP_201_CREATED)
async def create_feedback(payload: FeedbackCreateRequest):
    try:
        return await contact_service.add_feedback(payload)
    except ContactNotFoundError as e:
        raise _not_found(e) from e
    except DatabaseError as e:
        raise _database_failure(e) from e


@feedback_router.get("/{contact_id}")
async def get_contact_feedback(contact_id: str):
    """Contact detail with its feedback notes, oldest first."""
    try:
        return await contact_service.get_contact_with_feedback(contact_id)
    except ContactNotFoundError as e:
        raise _not_found(e) from e
    except DatabaseError as e:
        raise _database_failure(e) from e
