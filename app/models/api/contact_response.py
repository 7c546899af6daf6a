# app/models/api/contact_response.py
"""
Contact API response models.
Contact rows are passed through with their camelCase column names.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContactMutationResponse(BaseModel):
    message: str
    data: Any = None


class ContactListResponse(BaseModel):
    """One page of the dashboard contacts table."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[dict[str, Any]] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10
    page_count: int = 0
