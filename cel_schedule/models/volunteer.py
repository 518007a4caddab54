"""
Volunteer Model
Stores a volunteer that can belong to departments.
"""
from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
import uuid

from cel_schedule.database import Base


class Volunteer(Base):
    """A person who can be scheduled and grouped into departments."""

    __tablename__ = "volunteers"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_disabled: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")

    @classmethod
    def new(cls, name: str) -> "Volunteer":
        """Build a volunteer with a fresh id and timestamps."""
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            created_at=now,
            last_updated=now,
            is_disabled=False,
        )

    def __repr__(self) -> str:
        return f"<Volunteer(name={self.name})>"
