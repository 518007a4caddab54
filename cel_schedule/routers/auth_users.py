"""
Auth Users Router
Admin management of login accounts.
"""
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from cel_schedule.dependencies import get_audit_logger, get_database, require_admin
from cel_schedule.models import AccessLevel, AuthUser, LogType
from cel_schedule.repositories import Database
from cel_schedule.schemas.auth import (
    AuthUserCreate,
    AuthUserListItem,
    AuthUserResponse,
    AuthUserUpdate,
)
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey
from cel_schedule.services.auth_service import get_password_hash


router = APIRouter()


async def get_user_or_404(db: Database, user_id: str) -> AuthUser:
    user = await db.auth_users.get(user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("", response_model=List[AuthUserListItem])
async def list_users(
    db: Database = Depends(get_database),
    current_user: AuthUser = Depends(require_admin)
):
    """List all users."""
    return await db.auth_users.list()


@router.get("/{user_id}", response_model=AuthUserResponse)
async def get_user(
    user_id: str,
    db: Database = Depends(get_database),
    current_user: AuthUser = Depends(require_admin)
):
    """Get a user by ID."""
    return await get_user_or_404(db, user_id)


@router.post("", response_model=AuthUserResponse, status_code=201)
async def create_user(
    data: AuthUserCreate,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Create a login account linked to a volunteer."""
    if await db.auth_users.get_by_username(data.username) is not None:
        raise HTTPException(status_code=409, detail="Username already exists")

    if await db.volunteers.get(data.volunteer_id) is None:
        raise HTTPException(status_code=400, detail="Volunteer not found")

    user = AuthUser.new(
        volunteer_id=data.volunteer_id,
        username=data.username,
        hashed_password=get_password_hash(data.password),
        access_level=AccessLevel(data.access_level)
    )
    await db.auth_users.create(user)

    await audit.record(
        LogType.USER_CREATED,
        LogMetadata({
            MetaKey.TARGET_USER_ID: user.id,
            MetaKey.TARGET_USERNAME: user.username,
            MetaKey.ACCESS_LEVEL: user.access_level,
            MetaKey.VOLUNTEER_ID: user.volunteer_id,
        }),
        actor=current_user
    )
    return user


@router.put("/{user_id}", response_model=AuthUserResponse)
async def update_user(
    user_id: str,
    data: AuthUserUpdate,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger),
    current_user: AuthUser = Depends(require_admin)
):
    """Update a user's password, access level or disabled flag."""
    user = await get_user_or_404(db, user_id)
    old_access_level = user.access_level
    old_is_disabled = user.is_disabled

    if data.password is not None:
        user.hashed_password = get_password_hash(data.password)
    if data.access_level is not None:
        user.access_level = data.access_level
    if data.is_disabled is not None:
        user.is_disabled = data.is_disabled
    user.last_updated = datetime.now(timezone.utc)

    await db.auth_users.update(user)

    target = {
        MetaKey.TARGET_USER_ID: user.id,
        MetaKey.TARGET_USERNAME: user.username,
    }
    changes = []

    if user.access_level != old_access_level:
        changes.append("accessLevel")
        await audit.record(
            LogType.ACCESS_LEVEL_CHANGED,
            LogMetadata({
                **target,
                MetaKey.OLD_ACCESS_LEVEL: old_access_level,
                MetaKey.NEW_ACCESS_LEVEL: user.access_level,
            }),
            actor=current_user
        )

    if data.password is not None:
        changes.append("password")
        await audit.record(LogType.PASSWORD_CHANGED, LogMetadata(target), actor=current_user)

    if user.is_disabled != old_is_disabled:
        changes.append("isDisabled")
        await audit.record(
            LogType.USER_DISABLED if user.is_disabled else LogType.USER_ENABLED,
            LogMetadata(target),
            actor=current_user
        )

    await audit.record(
        LogType.USER_UPDATED,
        LogMetadata({
            **target,
            MetaKey.CHANGES: changes,
            MetaKey.OLD_IS_DISABLED: old_is_disabled,
            MetaKey.NEW_IS_DISABLED: user.is_disabled,
            MetaKey.PASSWORD_CHANGED: data.password is not None,
        }),
        actor=current_user
    )
    return user
