"""
Departments Router
Handles department CRUD and membership operations.
"""
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from cel_schedule.dependencies import (
    get_audit_logger,
    get_database,
    require_admin,
    require_department_head,
)
from cel_schedule.models import AuthUser, Department, LogType, MembershipType
from cel_schedule.repositories import Database
from cel_schedule.schemas.department import (
    DepartmentCreate,
    DepartmentListItem,
    DepartmentResponse,
    DepartmentUpdate,
    MemberAdd,
    MemberTypeUpdate,
)
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey


router = APIRouter()


async def get_department_or_404(db: Database, department_id: str) -> Department:
    department = await db.departments.get(department_id)
    if department is None:
        raise HTTPException(status_code=404, detail="Department not found")
    return department


async def ensure_volunteers_exist(db: Database, volunteer_ids: List[str]) -> None:
    """Raise 400 if any volunteer ID is unknown."""
    for volunteer_id in volunteer_ids:
        if await db.volunteers.get(volunteer_id) is None:
            raise HTTPException(
                status_code=400,
                detail=f"Volunteer '{volunteer_id}' not found"
            )


@router.get("", response_model=List[DepartmentListItem])
async def list_departments(db: Database = Depends(get_database)):
    """List all departments with member counts."""
    departments = await db.departments.list()
    return [
        DepartmentListItem(
            id=dept.id,
            department_name=dept.department_name,
            member_count=len(dept.volunteer_members),
            is_disabled=dept.is_disabled
        )
        for dept in departments
    ]


@router.get("/{department_id}", response_model=DepartmentResponse)
async def get_department(department_id: str, db: Database = Depends(get_database)):
    """Get a department by ID."""
    return await get_department_or_404(db, department_id)


@router.post("", response_model=DepartmentResponse, status_code=201)
async def create_department(
    data: DepartmentCreate,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Create a department with a head and optional members."""
    # Head first, duplicates dropped
    member_ids = [data.initial_head_id]
    for volunteer_id in data.volunteer_members:
        if volunteer_id not in member_ids:
            member_ids.append(volunteer_id)
    await ensure_volunteers_exist(db, member_ids)

    members = [Department.membership(data.initial_head_id, MembershipType.HEAD)]
    members.extend(
        Department.membership(volunteer_id, MembershipType.MEMBER)
        for volunteer_id in member_ids[1:]
    )
    department = Department.new(data.department_name.strip(), members)
    await db.departments.create(department)

    await audit.record(
        LogType.DEPARTMENT_CREATED,
        LogMetadata({
            MetaKey.DEPARTMENT_ID: department.id,
            MetaKey.DEPARTMENT_NAME: department.department_name,
        }),
        actor=current_user
    )
    return department


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: str,
    data: DepartmentUpdate,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Update a department's name or disabled flag."""
    department = await get_department_or_404(db, department_id)
    old_name = department.department_name

    if data.department_name is not None:
        department.department_name = data.department_name.strip()
    if data.is_disabled is not None:
        department.is_disabled = data.is_disabled
    department.last_updated = datetime.now(timezone.utc)

    await db.departments.update(department)

    metadata = LogMetadata({MetaKey.DEPARTMENT_ID: department.id})
    if department.department_name != old_name:
        metadata[MetaKey.OLD_DEPARTMENT_NAME] = old_name
        metadata[MetaKey.NEW_DEPARTMENT_NAME] = department.department_name
    else:
        metadata[MetaKey.DEPARTMENT_NAME] = department.department_name
    await audit.record(LogType.DEPARTMENT_UPDATED, metadata, actor=current_user)

    return department


@router.delete("/{department_id}")
async def delete_department(
    department_id: str,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Soft delete a department."""
    department = await get_department_or_404(db, department_id)
    if department.is_disabled:
        raise HTTPException(status_code=404, detail="Department is already deleted")

    department.is_disabled = True
    department.last_updated = datetime.now(timezone.utc)
    await db.departments.update(department)

    await audit.record(
        LogType.DEPARTMENT_DELETED,
        LogMetadata({
            MetaKey.DEPARTMENT_ID: department.id,
            MetaKey.DEPARTMENT_NAME: department.department_name,
        }),
        actor=current_user
    )
    return {"message": f"Department {department_id} deleted successfully"}


# =============================================================================
# Members
# =============================================================================

@router.post("/{department_id}/members", response_model=DepartmentResponse)
async def add_member(
    department_id: str,
    data: MemberAdd,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_department_head)
):
    """Add a volunteer to a department."""
    department = await get_department_or_404(db, department_id)
    await ensure_volunteers_exist(db, [data.volunteer_id])

    if department.find_member(data.volunteer_id) is not None:
        raise HTTPException(status_code=409, detail="Volunteer is already a member")

    # Reassign so the JSON column is flagged as changed
    department.volunteer_members = department.volunteer_members + [
        Department.membership(data.volunteer_id, data.membership_type)
    ]
    department.last_updated = datetime.now(timezone.utc)
    await db.departments.update(department)

    await audit.record(
        LogType.DEPARTMENT_MEMBER_ADDED,
        LogMetadata({
            MetaKey.DEPARTMENT_ID: department.id,
            MetaKey.DEPARTMENT_NAME: department.department_name,
            MetaKey.VOLUNTEER_ID: data.volunteer_id,
            MetaKey.MEMBERSHIP_TYPE: data.membership_type,
        }),
        actor=current_user
    )
    return department


@router.put("/{department_id}/members/{volunteer_id}", response_model=DepartmentResponse)
async def update_member_type(
    department_id: str,
    volunteer_id: str,
    data: MemberTypeUpdate,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_department_head)
):
    """Change a member's membership type."""
    department = await get_department_or_404(db, department_id)
    member = department.find_member(volunteer_id)
    if member is None:
        raise HTTPException(status_code=404, detail="Volunteer is not a member")

    old_type = member.get("membershipType")
    now = datetime.now(timezone.utc)
    department.volunteer_members = [
        {**m, "membershipType": data.membership_type.value, "lastUpdated": now.isoformat()}
        if m.get("volunteerId") == volunteer_id else m
        for m in department.volunteer_members
    ]
    department.last_updated = now
    await db.departments.update(department)

    await audit.record(
        LogType.DEPARTMENT_MEMBER_UPDATED,
        LogMetadata({
            MetaKey.DEPARTMENT_ID: department.id,
            MetaKey.VOLUNTEER_ID: volunteer_id,
            MetaKey.OLD_MEMBERSHIP_TYPE: old_type,
            MetaKey.NEW_MEMBERSHIP_TYPE: data.membership_type,
        }),
        actor=current_user
    )
    return department


@router.delete("/{department_id}/members/{volunteer_id}", response_model=DepartmentResponse)
async def remove_member(
    department_id: str,
    volunteer_id: str,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_department_head)
):
    """Remove a volunteer from a department."""
    department = await get_department_or_404(db, department_id)
    if department.find_member(volunteer_id) is None:
        raise HTTPException(status_code=404, detail="Volunteer is not a member")

    department.volunteer_members = [
        m for m in department.volunteer_members if m.get("volunteerId") != volunteer_id
    ]
    department.last_updated = datetime.now(timezone.utc)
    await db.departments.update(department)

    await audit.record(
        LogType.DEPARTMENT_MEMBER_REMOVED,
        LogMetadata({
            MetaKey.DEPARTMENT_ID: department.id,
            MetaKey.DEPARTMENT_NAME: department.department_name,
            MetaKey.VOLUNTEER_ID: volunteer_id,
        }),
        actor=current_user
    )
    return department
