"""
User profile and user management endpoints.

This module provides FastAPI endpoints for reading and updating the
caller's own profile, plus admin-only listing and creation of users.
"""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from timeclock.fastapi.dependencies.database import get_sync_db
from timeclock.fastapi.models.user import User
from timeclock.fastapi.schemas.user import UserCreate, UserProfileUpdate, UserRead
from timeclock.fastapi.crud.user import create_user, get_users, update_profile
from timeclock.security.dependencies import RequireActiveUser, RequireAdmin


router = APIRouter(tags=["authentication"])
user_router = APIRouter(tags=["users"])


@router.get("/user", response_model=UserRead, summary="Get Current User")
async def get_me(
    current_user: User = RequireActiveUser
):
    """
    Get the authenticated user's profile.

    **Errors:**
    - **401**: Not authenticated or invalid token
    - **403**: Account deactivated
    """
    return UserRead.model_validate(current_user)


@user_router.put("/profile", response_model=UserRead, summary="Update My Profile")
async def update_my_profile(
    profile: UserProfileUpdate,
    db: Session = Depends(get_sync_db),
    current_user: User = RequireActiveUser
):
    """
    Update the authenticated user's profile.

    **Parameters:**
    - **firstName**, **lastName**: Required
    - **email**: Required, must not belong to another user
    - **phone**, **address**: Optional

    **Errors:**
    - **409**: Email already registered
    - **422**: Validation errors
    """
    user = update_profile(db, current_user.id, profile)
    return UserRead.model_validate(user)


@user_router.get("", response_model=List[UserRead], summary="List Users")
async def list_users(
    skip: int = Query(0, ge=0, description="Number of users to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum users to return"),
    db: Session = Depends(get_sync_db),
    current_admin: User = RequireAdmin
):
    """
    List active users (admin-only).
    """
    return [UserRead.model_validate(user) for user in get_users(db, skip=skip, limit=limit)]


@user_router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED,
                  summary="Create User")
async def create_user_endpoint(
    user_create: UserCreate,
    db: Session = Depends(get_sync_db),
    current_admin: User = RequireAdmin
):
    """
    Create a user account (admin-only).

    **Errors:**
    - **403**: Not an administrator
    - **409**: Email already registered
    """
    user = create_user(db, user_create)
    return UserRead.model_validate(user)
