"""
JWT authentication utilities for the FastAPI application.

Tokens are issued by the identity provider (or by ``create_admin.py`` for
bootstrapping); the API only needs to verify them and read the user id
from the ``sub`` claim.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import HTTPException, status

from timeclock.fastapi.core.init_settings import global_settings


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Dictionary containing token payload data (sub, role, etc.)
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token as string

    Example:
        >>> token = create_access_token({"sub": "user_id"})
        >>> len(token) > 100
        True
    """
    to_encode = data.copy()
    issued_at = datetime.now(timezone.utc)

    # Set expiration time
    if expires_delta:
        expire = issued_at + expires_delta
    else:
        expire = issued_at + timedelta(minutes=global_settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expire,
        "iat": issued_at
    })

    return jwt.encode(
        to_encode,
        global_settings.JWT_SECRET_KEY,
        algorithm=global_settings.JWT_ALGORITHM
    )


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT access token.

    Args:
        token: JWT token string to verify

    Returns:
        Dictionary containing decoded token payload

    Raises:
        HTTPException: If token is invalid, expired, or has no subject
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token,
            global_settings.JWT_SECRET_KEY,
            algorithms=[global_settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise credentials_exception

    if payload.get("sub") is None:
        raise credentials_exception

    return payload


def create_user_token(user_id: str, is_admin: bool = False,
                      expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT token for a user.

    The role claim is informational; authorization always reads the
    ``is_admin`` flag from the database.

    Args:
        user_id: User ID (UUID as string)
        is_admin: Whether the user is an administrator
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token
    """
    token_data = {
        "sub": user_id,
        "role": "admin" if is_admin else "user"
    }

    return create_access_token(token_data, expires_delta)
