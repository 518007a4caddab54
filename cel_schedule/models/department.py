"""
Department Model
Stores a department and its membership list as a JSON document.
"""
from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import uuid

from cel_schedule.database import Base
from cel_schedule.models.enums import MembershipType


class Department(Base):
    """A group of volunteers led by one or more heads."""

    __tablename__ = "departments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    department_name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Each entry: volunteerId, joinedDate, membershipType, lastUpdated
    volunteer_members: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSONB,
        nullable=False,
        default=list
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_disabled: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")

    @classmethod
    def new(cls, department_name: str, members: List[Dict[str, Any]]) -> "Department":
        """Build a department with a fresh id and timestamps."""
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid.uuid4()),
            department_name=department_name,
            volunteer_members=members,
            created_at=now,
            last_updated=now,
            is_disabled=False,
        )

    @staticmethod
    def membership(volunteer_id: str, membership_type: MembershipType) -> Dict[str, Any]:
        """Build a membership entry stamped with the current time."""
        now = datetime.now(timezone.utc).isoformat()
        return {
            "volunteerId": volunteer_id,
            "joinedDate": now,
            "membershipType": membership_type.value,
            "lastUpdated": now,
        }

    def find_member(self, volunteer_id: str) -> Optional[Dict[str, Any]]:
        """Return the membership entry for a volunteer, if any."""
        for member in self.volunteer_members:
            if member.get("volunteerId") == volunteer_id:
                return member
        return None

    def is_head(self, volunteer_id: str) -> bool:
        member = self.find_member(volunteer_id)
        return member is not None and member.get("membershipType") == MembershipType.HEAD.value

    def __repr__(self) -> str:
        return f"<Department(name={self.department_name}, members={len(self.volunteer_members)})>"
