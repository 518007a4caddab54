"""
Volunteers Router
Handles volunteer CRUD operations.
"""
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from cel_schedule.dependencies import get_audit_logger, get_database, require_admin
from cel_schedule.models import AuthUser, LogType, Volunteer
from cel_schedule.repositories import Database
from cel_schedule.schemas.volunteer import (
    VolunteerCreate,
    VolunteerListItem,
    VolunteerResponse,
    VolunteerUpdate,
)
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey


router = APIRouter()


async def get_volunteer_or_404(db: Database, volunteer_id: str) -> Volunteer:
    volunteer = await db.volunteers.get(volunteer_id)
    if volunteer is None:
        raise HTTPException(status_code=404, detail="Volunteer not found")
    return volunteer


@router.get("", response_model=List[VolunteerListItem])
async def list_volunteers(db: Database = Depends(get_database)):
    """List all volunteers."""
    return await db.volunteers.list()


@router.get("/{volunteer_id}", response_model=VolunteerResponse)
async def get_volunteer(volunteer_id: str, db: Database = Depends(get_database)):
    """Get a volunteer by ID."""
    return await get_volunteer_or_404(db, volunteer_id)


@router.post("", response_model=VolunteerResponse, status_code=201)
async def create_volunteer(
    data: VolunteerCreate,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Create a new volunteer."""
    volunteer = Volunteer.new(data.name.strip())
    await db.volunteers.create(volunteer)

    await audit.record(
        LogType.VOLUNTEER_CREATED,
        LogMetadata({
            MetaKey.VOLUNTEER_ID: volunteer.id,
            MetaKey.VOLUNTEER_NAME: volunteer.name,
        }),
        actor=current_user
    )
    return volunteer


@router.put("/{volunteer_id}", response_model=VolunteerResponse)
async def update_volunteer(
    volunteer_id: str,
    data: VolunteerUpdate,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Update a volunteer. Only supplied fields change."""
    volunteer = await get_volunteer_or_404(db, volunteer_id)
    old_name = volunteer.name

    if data.name is not None:
        volunteer.name = data.name.strip()
    if data.is_disabled is not None:
        volunteer.is_disabled = data.is_disabled
    volunteer.last_updated = datetime.now(timezone.utc)

    await db.volunteers.update(volunteer)

    metadata = LogMetadata({MetaKey.VOLUNTEER_ID: volunteer.id})
    if volunteer.name != old_name:
        metadata[MetaKey.OLD_VOLUNTEER_NAME] = old_name
        metadata[MetaKey.NEW_VOLUNTEER_NAME] = volunteer.name
    else:
        metadata[MetaKey.VOLUNTEER_NAME] = volunteer.name
    await audit.record(LogType.VOLUNTEER_UPDATED, metadata, actor=current_user)

    return volunteer


@router.delete("/{volunteer_id}")
async def delete_volunteer(
    volunteer_id: str,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Soft delete a volunteer."""
    volunteer = await get_volunteer_or_404(db, volunteer_id)
    if volunteer.is_disabled:
        raise HTTPException(status_code=404, detail="Volunteer is already deleted")

    volunteer.is_disabled = True
    volunteer.last_updated = datetime.now(timezone.utc)
    await db.volunteers.update(volunteer)

    await audit.record(
        LogType.VOLUNTEER_DELETED,
        LogMetadata({
            MetaKey.VOLUNTEER_ID: volunteer.id,
            MetaKey.VOLUNTEER_NAME: volunteer.name,
        }),
        actor=current_user
    )
    return {"message": "Volunteer deleted successfully"}
