"""
Authentication dependencies for FastAPI.

This module resolves the bearer token to a ``User`` row and enforces the
administrator role on admin-only routes.
"""

from uuid import UUID
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from timeclock.fastapi.core.exceptions import ForbiddenError
from timeclock.fastapi.dependencies.database import get_sync_db
from timeclock.fastapi.crud.user import get_user
from timeclock.fastapi.models.user import User
from timeclock.security.auth import verify_access_token


# HTTP Bearer token scheme; missing credentials are reported as 401 below
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> dict:
    """
    Extract and validate JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer credentials from request header

    Returns:
        Dictionary containing decoded token payload

    Raises:
        HTTPException: If token is invalid or missing
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return verify_access_token(credentials.credentials)


async def get_current_user(
    token_data: dict = Depends(get_current_user_token),
    db: Session = Depends(get_sync_db)
) -> User:
    """
    Get current authenticated user.

    Args:
        token_data: Decoded JWT token payload
        db: Database session

    Returns:
        User instance for the authenticated caller

    Raises:
        HTTPException: If user not found (401) or inactive (403)
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        user_id = UUID(str(token_data.get("sub")))
    except ValueError:
        raise credentials_exception

    user = get_user(db, user_id)
    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated"
        )

    return user


async def get_current_admin(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get current authenticated administrator.

    Raises:
        ForbiddenError: If the caller is not an administrator
    """
    if not current_user.is_admin:
        raise ForbiddenError("Not enough permissions. Admin access required.")
    return current_user


# Convenience dependencies for different permission levels
RequireActiveUser = Depends(get_current_user)
RequireAdmin = Depends(get_current_admin)
