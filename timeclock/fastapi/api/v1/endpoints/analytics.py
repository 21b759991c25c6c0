"""
Analytics endpoints for user and system statistics.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timeclock.fastapi.dependencies.database import get_sync_db
from timeclock.fastapi.models.user import User
from timeclock.fastapi.schemas.analytics import SystemStats, UserStats
from timeclock.fastapi.crud.analytics import get_system_stats, get_user_stats
from timeclock.security.dependencies import RequireActiveUser, RequireAdmin


router = APIRouter(tags=["analytics"])


@router.get("/user-stats", response_model=UserStats, summary="Get My Statistics")
async def get_user_stats_endpoint(
    db: Session = Depends(get_sync_db),
    current_user: User = RequireActiveUser
):
    """
    Hours and minutes worked by the authenticated user this week and this month.

    Only completed entries count; an open session adds nothing until clock-out.
    """
    return get_user_stats(db, current_user.id)


@router.get("/system-stats", response_model=SystemStats, summary="Get System Statistics")
async def get_system_stats_endpoint(
    db: Session = Depends(get_sync_db),
    current_admin: User = RequireAdmin
):
    """
    System-wide statistics (admin-only).

    **Returns:**
    - **totalEmployees**: Active user accounts
    - **activeSessions**: Users currently clocked in
    - **weeklyHours**: Minutes recorded in entries clocked in this week
    - **avgHours**: weeklyHours per entry clocked in this week

    **Errors:**
    - **401**: Not authenticated
    - **403**: Not an administrator
    """
    return get_system_stats(db)
