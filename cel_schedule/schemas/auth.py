"""
Authentication Schemas
Pydantic models for auth requests and responses.
"""
from pydantic import Field
from typing import Literal, Optional
from datetime import datetime

from cel_schedule.schemas.base import CamelModel


class LoginRequest(CamelModel):
    """Login credentials."""
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    """Issued token and the user it belongs to."""
    token: str
    user_id: str
    username: str
    access_level: int
    expires_at: datetime


class AuthUserCreate(CamelModel):
    """Schema for creating a user linked to a volunteer."""
    volunteer_id: str = Field(..., min_length=1)
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=8)
    access_level: Literal[1, 2]


class AuthUserUpdate(CamelModel):
    """Schema for updating a user. Only supplied fields change."""
    password: Optional[str] = Field(default=None, min_length=8)
    access_level: Optional[Literal[1, 2]] = None
    is_disabled: Optional[bool] = None


class AuthUserResponse(CamelModel):
    """User data for API responses. Never includes the password."""
    id: str
    volunteer_id: str
    username: str
    access_level: int
    created_at: datetime
    last_updated: datetime
    is_disabled: bool


class AuthUserListItem(CamelModel):
    """Sanitized summary for list views."""
    id: str
    username: str
    volunteer_id: str
    access_level: int
    is_disabled: bool
