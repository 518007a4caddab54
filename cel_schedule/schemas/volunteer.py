"""
Volunteer Schemas
Pydantic models for volunteer requests and responses.
"""
from pydantic import Field
from typing import Optional
from datetime import datetime

from cel_schedule.schemas.base import CamelModel


class VolunteerCreate(CamelModel):
    """Schema for creating a volunteer."""
    name: str = Field(..., min_length=2, max_length=100)


class VolunteerUpdate(CamelModel):
    """Schema for updating a volunteer. Only supplied fields change."""
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    is_disabled: Optional[bool] = None


class VolunteerResponse(CamelModel):
    """Detailed volunteer data."""
    id: str
    name: str
    is_disabled: bool
    created_at: datetime
    last_updated: datetime


class VolunteerListItem(CamelModel):
    """Summary volunteer data for list views."""
    id: str
    name: str
    is_disabled: bool
