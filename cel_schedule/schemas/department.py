"""
Department Schemas
Pydantic models for department requests and responses.
"""
from pydantic import Field
from typing import List, Optional
from datetime import datetime

from cel_schedule.models.enums import MembershipType
from cel_schedule.schemas.base import CamelModel


class MembershipInfo(CamelModel):
    """A volunteer's membership in a department."""
    volunteer_id: str
    joined_date: datetime
    membership_type: MembershipType
    last_updated: datetime


class DepartmentCreate(CamelModel):
    """Schema for creating a department. A starting head is required."""
    department_name: str = Field(..., min_length=2, max_length=100)
    initial_head_id: str = Field(..., min_length=1)
    volunteer_members: List[str] = Field(default_factory=list)


class DepartmentUpdate(CamelModel):
    """Schema for updating a department."""
    department_name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    is_disabled: Optional[bool] = None


class MemberAdd(CamelModel):
    """Schema for adding a member to a department."""
    volunteer_id: str = Field(..., min_length=1)
    membership_type: MembershipType = MembershipType.MEMBER


class MemberTypeUpdate(CamelModel):
    """Schema for changing a member's type."""
    membership_type: MembershipType


class DepartmentResponse(CamelModel):
    """Detailed department data."""
    id: str
    department_name: str
    volunteer_members: List[MembershipInfo]
    created_at: datetime
    last_updated: datetime
    is_disabled: bool


class DepartmentListItem(CamelModel):
    """Summary department data for list views."""
    id: str
    department_name: str
    member_count: int
    is_disabled: bool
