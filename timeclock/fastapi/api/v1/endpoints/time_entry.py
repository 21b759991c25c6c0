"""
Time entry endpoints for clock-in/out functionality.

This module provides FastAPI endpoints for opening and closing work
sessions and for reading time entry history.
"""

import logging
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from timeclock.fastapi.core.init_settings import global_settings
from timeclock.fastapi.dependencies.database import get_sync_db
from timeclock.fastapi.models.user import User
from timeclock.fastapi.schemas.time_entry import TimeEntryRead, ClockOutRequest
from timeclock.fastapi.crud.time_entry import (
    clock_in, clock_out, get_active_entry, get_user_time_entries, get_all_time_entries
)
from timeclock.security.dependencies import RequireActiveUser, RequireAdmin

logger = logging.getLogger(__name__)

router = APIRouter(tags=["time-tracking"])


@router.post("/clock-in", response_model=TimeEntryRead, status_code=status.HTTP_201_CREATED,
             summary="Clock In")
async def clock_in_endpoint(
    db: Session = Depends(get_sync_db),
    current_user: User = RequireActiveUser
):
    """
    Clock in the authenticated user.

    **Permissions:** Requires active user authentication

    **Returns:**
    - The new active time entry

    **Errors:**
    - **401**: Not authenticated
    - **403**: User account deactivated
    - **409**: User is already clocked in
    """
    try:
        time_entry = clock_in(db, current_user.id)
        return TimeEntryRead.model_validate(time_entry)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Clock-in failed for user %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Clock-in failed"
        )


@router.put("/{entry_id}/clock-out", response_model=TimeEntryRead, summary="Clock Out")
async def clock_out_endpoint(
    entry_id: UUID,
    signatures: ClockOutRequest,
    db: Session = Depends(get_sync_db),
    current_user: User = RequireActiveUser
):
    """
    Clock out of an active time entry owned by the authenticated user.

    **Permissions:** Requires active user authentication; the caller must own the entry

    **Parameters:**
    - **employeeSignature**: Employee signature as `data:image/<type>;base64,<payload>`
    - **supervisorSignature**: Supervisor signature in the same format

    **Returns:**
    - The completed time entry with `clockOutTime` and `totalHours` (minutes)

    **Errors:**
    - **401**: Not authenticated
    - **404**: Entry not found (or owned by another user)
    - **409**: Entry already completed
    - **422**: Malformed signature
    """
    try:
        time_entry = clock_out(
            db,
            entry_id,
            current_user.id,
            signatures.employee_signature,
            signatures.supervisor_signature
        )
        return TimeEntryRead.model_validate(time_entry)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Clock-out failed for entry %s", entry_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Clock-out failed"
        )


@router.get("/active", response_model=Optional[TimeEntryRead], summary="Get Active Entry")
async def get_active_entry_endpoint(
    db: Session = Depends(get_sync_db),
    current_user: User = RequireActiveUser
):
    """
    Get the authenticated user's active time entry.

    **Returns:**
    - The active entry, or `null` when the user is clocked out
    """
    entry = get_active_entry(db, current_user.id)
    return TimeEntryRead.model_validate(entry) if entry else None


@router.get("/user", response_model=List[TimeEntryRead], summary="Get My Time Entries")
async def get_my_time_entries(
    limit: int = Query(
        global_settings.HISTORY_DEFAULT_LIMIT,
        ge=1,
        le=global_settings.HISTORY_MAX_LIMIT,
        description="Maximum entries to return"
    ),
    db: Session = Depends(get_sync_db),
    current_user: User = RequireActiveUser
):
    """
    Get time entries for the authenticated user, newest first.

    **Parameters:**
    - **limit**: Maximum number of entries to return (default 50)
    """
    entries = get_user_time_entries(db, current_user.id, limit)
    return [TimeEntryRead.model_validate(entry) for entry in entries]


@router.get("", response_model=List[TimeEntryRead], summary="Get All Time Entries")
async def get_all_time_entries_endpoint(
    db: Session = Depends(get_sync_db),
    current_admin: User = RequireAdmin
):
    """
    Get every user's time entries, newest first (admin-only).

    **Permissions:** Requires administrator

    **Errors:**
    - **401**: Not authenticated
    - **403**: Not an administrator
    """
    entries = get_all_time_entries(db)
    return [TimeEntryRead.model_validate(entry) for entry in entries]
