"""
System Log Model
Audit log entries with schema-less JSONB metadata.
"""
from sqlalchemy import String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from datetime import datetime
from typing import Any, Dict

from cel_schedule.database import Base


class SystemLog(Base):
    """An audit event recorded by the service."""

    __tablename__ = "system_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    time_detected: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True
    )
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    category: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    severity: Mapped[str] = mapped_column(String(20), nullable=False)
    log_metadata: Mapped[Dict[str, Any]] = mapped_column(
        "metadata",
        JSONB,
        nullable=False,
        default=dict
    )
    last_updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False, server_default="false")
    archive_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def __repr__(self) -> str:
        return f"<SystemLog(type={self.type}, severity={self.severity})>"
