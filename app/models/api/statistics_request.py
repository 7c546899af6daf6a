# app/models/api/statistics_request.py
"""
Statistics API request models.
The `filters` query parameter carries a JSON object; it is parsed once here.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.features.statistics.domain.models import StatisticsFilters


class StatisticsFiltersPayload(BaseModel):
    """JSON body of the `filters` query parameter."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    contact_type: str | None = Field(default=None, alias="contactType")
    service_type: str | None = Field(default=None, alias="serviceType")
    district: str | None = Field(default=None, alias="district")

    def to_domain(self) -> StatisticsFilters:
        return StatisticsFilters(
            contact_type=self.contact_type,
            service_type=self.service_type,
            district=self.district,
        )
