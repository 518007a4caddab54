"""
Logs Router
Admin access to audit logs: queries, archiving and statistics.
"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Query

from cel_schedule.dependencies import get_audit_logger, get_database, require_admin
from cel_schedule.models import AuthUser, LogCategory, LogType
from cel_schedule.repositories import Database, LogFilters
from cel_schedule.schemas.log import (
    ArchiveLogsRequest,
    ArchiveLogsResponse,
    LogCategoriesResponse,
    LogListResponse,
    LogResponse,
    LogStatsResponse,
)
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey


router = APIRouter()

DEFAULT_LIMIT = 50
RECENT_WINDOW = timedelta(hours=24)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@router.get("", response_model=LogListResponse)
async def list_logs(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    log_type: Optional[LogType] = Query(None, alias="logType"),
    user_id: Optional[str] = Query(None, alias="userId"),
    volunteer_id: Optional[str] = Query(None, alias="volunteerId"),
    department_id: Optional[str] = Query(None, alias="departmentId"),
    category: Optional[LogCategory] = Query(None),
    severity: Optional[str] = Query(None),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    include_archived: bool = Query(False, alias="includeArchived"),
    db: Database = Depends(get_database),
    current_user: AuthUser = Depends(require_admin)
):
    """List audit logs, newest first."""
    filters = LogFilters(
        log_type=log_type.value if log_type else None,
        category=category.value if category else None,
        severity=severity,
        user_id=user_id,
        volunteer_id=volunteer_id,
        department_id=department_id,
        start_date=as_utc(start_date),
        end_date=as_utc(end_date),
        include_archived=include_archived
    )
    logs, total = await db.logs.query(filters, limit=limit, offset=offset)
    return LogListResponse(logs=[LogResponse.from_model(log) for log in logs], total=total)


@router.get("/archived", response_model=LogListResponse)
async def list_archived_logs(
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Database = Depends(get_database),
    current_user: AuthUser = Depends(require_admin)
):
    """List archived audit logs, most recently archived first."""
    logs, total = await db.logs.list_archived(limit=limit, offset=offset)
    return LogListResponse(logs=[LogResponse.from_model(log) for log in logs], total=total)


@router.post("/archive", response_model=ArchiveLogsResponse)
async def archive_logs(
    data: ArchiveLogsRequest,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Archive every log detected before the given date."""
    before = as_utc(data.before_date)
    archived_count = await db.logs.archive_before(before)

    await audit.record(
        LogType.LOGS_ARCHIVED,
        LogMetadata({
            MetaKey.RECORD_COUNT: archived_count,
            MetaKey.BEFORE_DATE: before,
        }),
        actor=current_user
    )
    return ArchiveLogsResponse(
        archived_count=archived_count,
        message="Logs archived successfully"
    )


@router.get("/categories", response_model=LogCategoriesResponse)
async def get_categories(current_user: AuthUser = Depends(require_admin)):
    """List the available log categories."""
    return LogCategoriesResponse(categories=[category.value for category in LogCategory])


@router.get("/stats", response_model=LogStatsResponse)
async def get_stats(
    db: Database = Depends(get_database),
    current_user: AuthUser = Depends(require_admin)
):
    """Aggregate log counts for the dashboard."""
    logs = await db.logs.list_all()
    recent_since = datetime.now(timezone.utc) - RECENT_WINDOW

    return LogStatsResponse(
        total_logs=len(logs),
        by_type=Counter(log.type for log in logs),
        by_category=Counter(log.category for log in logs if log.category),
        by_severity=Counter(log.severity for log in logs if log.severity),
        recent_logs=sum(1 for log in logs if as_utc(log.time_detected) >= recent_since),
        archived=sum(1 for log in logs if log.is_archived)
    )
