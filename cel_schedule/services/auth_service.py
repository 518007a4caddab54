"""
Authentication Service
Handles password hashing and JWT token creation/validation.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Tuple

from jose import jwt, JWTError
from passlib.context import CryptContext

from cel_schedule.config import settings
from cel_schedule.models import AuthUser


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# JWT settings
ALGORITHM = "HS256"
TOKEN_ISSUER = "cel-scheduling-system"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    return pwd_context.hash(password)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None
) -> Tuple[str, datetime]:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string and its expiration time
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=settings.jwt_expire_hours)

    to_encode.update({"exp": expire, "iss": TOKEN_ISSUER})

    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)

    return encoded_jwt, expire


def create_user_token(user: AuthUser) -> Tuple[str, datetime]:
    """Create a token carrying the user's id, name and access level."""
    return create_access_token(
        data={
            "sub": user.id,
            "username": user.username,
            "accessLevel": user.access_level,
        }
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """
    Decode and validate a JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded payload dict or None if invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
            issuer=TOKEN_ISSUER
        )
        return payload
    except JWTError:
        return None
