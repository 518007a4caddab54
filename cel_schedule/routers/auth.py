"""
Authentication Router
Handles login and current-user endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status

from cel_schedule.dependencies import get_audit_logger, get_current_user, get_database
from cel_schedule.models import AuthUser, LogType, Severity
from cel_schedule.repositories import Database
from cel_schedule.schemas.auth import AuthUserResponse, LoginRequest, LoginResponse
from cel_schedule.services.audit_log import AuditLogger, LogMetadata, MetaKey
from cel_schedule.services.auth_service import create_user_token, verify_password


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    db: Database = Depends(get_database),
    audit: AuditLogger = Depends(get_audit_logger)
):
    """Authenticate user and issue a JWT."""
    user = await db.auth_users.get_by_username(data.username)

    # Verify credentials
    if user is None or not verify_password(data.password, user.hashed_password):
        await audit.record(
            LogType.USER_LOGIN_FAILED,
            LogMetadata({
                MetaKey.ATTEMPTED_USERNAME: data.username,
                MetaKey.REASON: "invalid credentials",
            }),
            severity=Severity.WARNING
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    # Check if user is active
    if user.is_disabled:
        await audit.record(
            LogType.USER_LOGIN_FAILED,
            LogMetadata({
                MetaKey.ATTEMPTED_USERNAME: data.username,
                MetaKey.REASON: "account disabled",
            }),
            severity=Severity.WARNING
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is disabled"
        )

    # Create token
    token, expires_at = create_user_token(user)

    logger.info("User %s logged in", user.username)
    await audit.record(LogType.USER_LOGIN, actor=user)

    return LoginResponse(
        token=token,
        user_id=user.id,
        username=user.username,
        access_level=user.access_level,
        expires_at=expires_at
    )


@router.get("/me", response_model=AuthUserResponse)
async def get_me(current_user: AuthUser = Depends(get_current_user)):
    """Get the authenticated user."""
    return current_user
