"""
TimeEntry CRUD operations.

This module owns the time entry lifecycle: clock-in opens an ``active``
entry, clock-out completes it exactly once. Both transitions are single
guarded writes so that concurrent requests cannot create a second active
entry for a user or complete the same entry twice.
"""

import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import desc, update
from sqlalchemy.exc import IntegrityError

from timeclock.fastapi.core.exceptions import (
    ConflictError, InvalidStateError, NotFoundError, SignatureValidationError
)
from timeclock.fastapi.core.utils import elapsed_minutes, to_storage, utcnow
from timeclock.fastapi.models.time_entry import TimeEntry, TimeEntryStatus

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "data:image/"
SIGNATURE_MARKER = "base64,"


def validate_signature(field: str, label: str, value: Optional[str]) -> str:
    """
    Check that a signature is a base64 image data URI.

    Only the ``data:image/`` prefix and the ``base64,`` marker are checked;
    the image itself is not decoded.

    Args:
        field: Request field name reported back to the client
        label: Human-readable name used in the message
        value: Submitted signature

    Returns:
        The signature unchanged

    Raises:
        SignatureValidationError: If the signature is empty or malformed
    """
    if not value:
        raise SignatureValidationError(field, f"{label} is required")
    if not value.startswith(SIGNATURE_PREFIX) or SIGNATURE_MARKER not in value:
        raise SignatureValidationError(field, f"{label} must be a valid base64 image")
    return value


class TimeEntryCRUD:
    """CRUD operations for TimeEntry model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def clock_in(self, user_id: UUID, now: Optional[datetime] = None) -> TimeEntry:
        """
        Open a new active time entry for a user.

        Args:
            user_id: User UUID
            now: Clock-in instant (defaults to current time)

        Returns:
            Created TimeEntry instance

        Raises:
            ConflictError: If the user already has an active entry
        """
        if self.get_active_entry(user_id):
            logger.warning("Rejected clock-in for user %s: already clocked in", user_id)
            raise ConflictError("User is already clocked in")

        db_entry = TimeEntry(
            user_id=user_id,
            clock_in_time=to_storage(now) if now else utcnow(),
            status=TimeEntryStatus.ACTIVE
        )

        self.db.add(db_entry)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost the race against a concurrent clock-in
            self.db.rollback()
            logger.warning("Rejected clock-in for user %s: concurrent active entry", user_id)
            raise ConflictError("User is already clocked in")
        self.db.refresh(db_entry)

        logger.info("User %s clocked in (entry %s)", user_id, db_entry.id)
        return db_entry

    def clock_out(self, entry_id: UUID, user_id: UUID,
                  employee_signature: str, supervisor_signature: str,
                  now: Optional[datetime] = None) -> TimeEntry:
        """
        Complete an active time entry with both signatures.

        Args:
            entry_id: TimeEntry UUID
            user_id: UUID of the requesting user, who must own the entry
            employee_signature: Employee signature data URI
            supervisor_signature: Supervisor signature data URI
            now: Clock-out instant (defaults to current time)

        Returns:
            The completed TimeEntry

        Raises:
            SignatureValidationError: If either signature is malformed
            NotFoundError: If the entry is missing or owned by another user
            InvalidStateError: If the entry is already completed
        """
        validate_signature("employeeSignature", "Employee signature", employee_signature)
        validate_signature("supervisorSignature", "Supervisor signature", supervisor_signature)

        db_entry = self.get_time_entry(entry_id)
        # Other users' entries are reported as missing
        if not db_entry or db_entry.user_id != user_id:
            raise NotFoundError("Time entry not found")

        if db_entry.status != TimeEntryStatus.ACTIVE:
            logger.warning("Rejected clock-out of entry %s: already completed", entry_id)
            raise InvalidStateError("Time entry is already completed")

        clock_out_time = to_storage(now) if now else utcnow()
        total_minutes = elapsed_minutes(db_entry.clock_in_time, clock_out_time)

        result = self.db.execute(
            update(TimeEntry)
            .where(TimeEntry.id == entry_id,
                   TimeEntry.user_id == user_id,
                   TimeEntry.status == TimeEntryStatus.ACTIVE)
            .values(
                clock_out_time=clock_out_time,
                total_hours=total_minutes,
                employee_signature=employee_signature,
                supervisor_signature=supervisor_signature,
                status=TimeEntryStatus.COMPLETED
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount != 1:
            # Completed by a concurrent request between the read and the update
            self.db.rollback()
            logger.warning("Rejected clock-out of entry %s: completed concurrently", entry_id)
            raise InvalidStateError("Time entry is already completed")

        self.db.commit()
        self.db.refresh(db_entry)

        logger.info("User %s clocked out (entry %s, %d minutes)", user_id, entry_id, total_minutes)
        return db_entry

    def get_time_entry(self, entry_id: UUID) -> Optional[TimeEntry]:
        """
        Get time entry by ID.

        Args:
            entry_id: TimeEntry UUID

        Returns:
            TimeEntry instance or None if not found
        """
        return self.db.query(TimeEntry).filter(TimeEntry.id == entry_id).first()

    def get_active_entry(self, user_id: UUID) -> Optional[TimeEntry]:
        """Get the user's active entry, or None when clocked out."""
        return (self.db.query(TimeEntry)
                .filter(TimeEntry.user_id == user_id,
                        TimeEntry.status == TimeEntryStatus.ACTIVE)
                .order_by(desc(TimeEntry.clock_in_time))
                .first())

    def get_user_time_entries(self, user_id: UUID, limit: int = 50) -> List[TimeEntry]:
        """
        Get a user's time entries, newest first.

        Args:
            user_id: User UUID
            limit: Maximum number of entries to return

        Returns:
            List of TimeEntry instances
        """
        return (self.db.query(TimeEntry)
                .filter(TimeEntry.user_id == user_id)
                .order_by(desc(TimeEntry.clock_in_time), desc(TimeEntry.created_at))
                .limit(limit)
                .all())

    def get_all_time_entries(self) -> List[TimeEntry]:
        """Get every user's time entries, newest first."""
        return (self.db.query(TimeEntry)
                .order_by(desc(TimeEntry.clock_in_time), desc(TimeEntry.created_at))
                .all())


# Convenience functions
def clock_in(db: Session, user_id: UUID, now: Optional[datetime] = None) -> TimeEntry:
    """Open a new active time entry."""
    return TimeEntryCRUD(db).clock_in(user_id, now)


def clock_out(db: Session, entry_id: UUID, user_id: UUID,
              employee_signature: str, supervisor_signature: str,
              now: Optional[datetime] = None) -> TimeEntry:
    """Complete an active time entry."""
    return TimeEntryCRUD(db).clock_out(entry_id, user_id, employee_signature, supervisor_signature, now)


def get_active_entry(db: Session, user_id: UUID) -> Optional[TimeEntry]:
    """Get the user's active entry."""
    return TimeEntryCRUD(db).get_active_entry(user_id)


def get_user_time_entries(db: Session, user_id: UUID, limit: int = 50) -> List[TimeEntry]:
    """Get a user's time entries."""
    return TimeEntryCRUD(db).get_user_time_entries(user_id, limit)


def get_all_time_entries(db: Session) -> List[TimeEntry]:
    """Get all time entries."""
    return TimeEntryCRUD(db).get_all_time_entries()
