"""
Log Schemas
Pydantic models for audit log queries and responses.
"""
from pydantic import Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from cel_schedule.models import SystemLog
from cel_schedule.schemas.base import CamelModel


class LogResponse(CamelModel):
    """A single audit log entry."""
    id: str
    time_detected: datetime
    type: str
    category: str
    severity: str
    metadata: Dict[str, Any]
    last_updated: datetime
    is_archived: bool
    archive_date: Optional[datetime] = None

    @classmethod
    def from_model(cls, log: SystemLog) -> "LogResponse":
        return cls(
            id=log.id,
            time_detected=log.time_detected,
            type=log.type,
            category=log.category,
            severity=log.severity,
            metadata=log.log_metadata,
            last_updated=log.last_updated,
            is_archived=log.is_archived,
            archive_date=log.archive_date,
        )


class LogListResponse(CamelModel):
    """A page of audit log entries."""
    logs: List[LogResponse]
    total: int


class ArchiveLogsRequest(CamelModel):
    """Archive every log detected before this instant."""
    before_date: datetime


class ArchiveLogsResponse(CamelModel):
    archived_count: int
    message: str


class LogCategoriesResponse(CamelModel):
    categories: List[str]


class LogStatsResponse(CamelModel):
    """Aggregate counts for the admin dashboard."""
    total_logs: int
    by_type: Dict[str, int] = Field(default_factory=dict)
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_severity: Dict[str, int] = Field(default_factory=dict)
    recent_logs: int
    archived: int
