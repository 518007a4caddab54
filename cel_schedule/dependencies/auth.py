"""
Authentication Dependencies
FastAPI dependencies for route protection.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from cel_schedule.dependencies.database import get_database
from cel_schedule.models import AccessLevel, AuthUser
from cel_schedule.repositories import Database
from cel_schedule.services.auth_service import decode_token


BEARER_PREFIX = "Bearer "


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"}
    )


async def get_current_user(
    request: Request,
    db: Database = Depends(get_database)
) -> AuthUser:
    """
    Extract and validate the Bearer JWT, return the current user.

    Raises HTTPException 401 if not authenticated.
    """
    header = request.headers.get("Authorization")
    if not header:
        raise _unauthorized("Authorization header required")

    if not header.startswith(BEARER_PREFIX):
        raise _unauthorized("Invalid authorization header format")

    # Decode token
    payload = decode_token(header[len(BEARER_PREFIX):].strip())
    if payload is None:
        raise _unauthorized("Invalid or expired token")

    user_id = payload.get("sub")
    if user_id is None:
        raise _unauthorized("Invalid token claims")

    user = await db.auth_users.get(user_id)
    if user is None:
        raise _unauthorized("User not found")

    if user.is_disabled:
        raise _unauthorized("User account is disabled")

    return user


async def require_admin(
    current_user: Annotated[AuthUser, Depends(get_current_user)]
) -> AuthUser:
    """
    Ensure the current user is an administrator.

    Raises HTTPException 403 otherwise.
    """
    if current_user.access_level != AccessLevel.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user


async def require_department_head(
    department_id: str,
    current_user: Annotated[AuthUser, Depends(get_current_user)],
    db: Database = Depends(get_database)
) -> AuthUser:
    """
    Ensure the current user is an admin or a head of the department in the path.

    Raises HTTPException 403 otherwise.
    """
    if current_user.access_level == AccessLevel.ADMIN:
        return current_user

    department = await db.departments.get(department_id)
    if department is not None and department.is_head(current_user.volunteer_id):
        return current_user

    raise HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail="Department head access required"
    )
