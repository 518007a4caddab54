"""
Auth User Model
Stores login credentials linked to a volunteer.
"""
from sqlalchemy import String, Boolean, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime, timezone
import uuid

from cel_schedule.database import Base
from cel_schedule.models.enums import AccessLevel


class AuthUser(Base):
    """User account for authentication."""

    __tablename__ = "auth_users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    volunteer_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    access_level: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_disabled: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")

    @classmethod
    def new(
        cls,
        volunteer_id: str,
        username: str,
        hashed_password: str,
        access_level: AccessLevel
    ) -> "AuthUser":
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid.uuid4()),
            volunteer_id=volunteer_id,
            username=username,
            hashed_password=hashed_password,
            access_level=int(access_level),
            created_at=now,
            last_updated=now,
            is_disabled=False,
        )

    @property
    def is_admin(self) -> bool:
        return self.access_level == AccessLevel.ADMIN

    def __repr__(self) -> str:
        return f"<AuthUser(username={self.username})>"
