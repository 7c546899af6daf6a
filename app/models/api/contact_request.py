# app/models/api/contact_request.py
"""
Contact and feedback API request models.
Used by routes for input validation.
"""

import re
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

PHONE_PATTERN = re.compile(r"^\+?\d{7,15}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-.()]")


def normalize_phone(value: str) -> str:
    """Strip separators and check the number is an optional + and 7-15 digits."""
    cleaned = _PHONE_SEPARATORS.sub("", value or "")
    if not PHONE_PATTERN.match(cleaned):
        raise ValueError("Phone number must be 7-15 digits, optionally starting with +")
    return cleaned


class _ContactFields(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    def to_columns(self) -> dict:
        """Column name to value for every field the client sent."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ContactCreateRequest(_ContactFields):
    """Request for registering a first timer or new convert."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., description="Phone number, separators allowed")
    contact_type: str = Field(..., min_length=1, description="first timer or new convert")
    service_type: str = Field(..., min_length=1, description="Service the contact attended")
    address: str | None = Field(default=None, max_length=500)
    prayer_point: str | None = Field(default=None, max_length=2000)
    contact_date: date | None = None
    gender: str | None = None
    district: str | None = None

    @field_validator("phone")
    @classmethod
    def _validate_phone(cls, value: str) -> str:
        return normalize_phone(value)


class ContactUpdateRequest(_ContactFields):
    """
    Partial update. Only the fields present are written; id and createdAt
    are not model fields, so they are dropped if a client sends them.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = None
    contact_type: str | None = Field(default=None, min_length=1)
    service_type: str | None = Field(default=None, min_length=1)
    address: str | None = Field(default=None, max_length=500)
    prayer_point: str | None = Field(default=None, max_length=2000)
    contact_date: date | None = None
    gender: str | None = None
    district: str | None = None

    @field_validator(
        "first_name", "last_name", "phone", "contact_type", "service_type", mode="before"
    )
    @classmethod
    def _reject_null_required(cls, value):
        # Omit a required column to leave it unchanged; it cannot be cleared
        if value is None:
            raise ValueError("Field cannot be null")
        return value

    @field_validator("phone")
    @classmethod
    def _validate_phone(cls, value: str | None) -> str | None:
        return None if value is None else normalize_phone(value)


class FeedbackCreateRequest(BaseModel):
    """Request for adding a follow-up note to a contact."""

    model_config = ConfigDict(str_strip_whitespace=True)

    contact_id: str = Field(..., min_length=1)
    feedback: str = Field(..., min_length=1, max_length=5000)
    initiator: str = Field(..., min_length=1, max_length=200)
    date_created: datetime
