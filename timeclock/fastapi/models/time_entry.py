"""
TimeEntry model for work sessions.

A time entry is opened by a clock-in (status ``active``) and closed exactly
once by a clock-out (status ``completed``), which records the clock-out
time, the elapsed whole minutes and both signatures.
"""

from uuid import uuid4
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Index, Uuid, text, Enum as SQLEnum
from sqlalchemy.orm import relationship
from enum import Enum

from timeclock.fastapi.core.utils import utcnow
from timeclock.fastapi.dependencies.database import Base


class TimeEntryStatus(str, Enum):
    """Enum for time entry lifecycle states."""
    ACTIVE = "active"
    COMPLETED = "completed"


class TimeEntry(Base):
    """
    Time entry model for one clock-in/clock-out session.

    ``clock_out_time`` and ``total_hours`` are set if and only if the entry
    is completed. At most one active entry per user is enforced by the
    partial unique index ``uq_time_entries_active_user``.

    Attributes:
        id: Unique identifier (UUID)
        user_id: Foreign key to User model
        clock_in_time: When the session started (naive UTC)
        clock_out_time: When the session ended (naive UTC), None while active
        status: active or completed
        total_hours: Elapsed whole minutes, None while active
        employee_signature: Employee's signature as an image data URI
        supervisor_signature: Supervisor's signature as an image data URI
        created_at: Record creation timestamp
        updated_at: Last update timestamp

    Relationships:
        user: The user this entry belongs to
    """

    __tablename__ = "time_entries"

    # Primary key
    id = Column(
        Uuid,
        primary_key=True,
        default=uuid4,
        index=True,
        doc="Unique time entry identifier"
    )

    # Foreign key to User
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Reference to the owning user"
    )

    # Session
    clock_in_time = Column(
        DateTime,
        nullable=False,
        default=utcnow,
        index=True,
        doc="When the user clocked in"
    )

    clock_out_time = Column(
        DateTime,
        nullable=True,
        doc="When the user clocked out"
    )

    status = Column(
        SQLEnum(
            TimeEntryStatus,
            name="time_entry_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=TimeEntryStatus.ACTIVE,
        doc="Lifecycle state (active or completed)"
    )

    # Named total_hours for API compatibility; the value is in minutes
    total_hours = Column(
        Integer,
        nullable=True,
        doc="Elapsed whole minutes between clock-in and clock-out"
    )

    employee_signature = Column(Text, nullable=True, doc="Employee signature data URI")
    supervisor_signature = Column(Text, nullable=True, doc="Supervisor signature data URI")

    # Audit timestamps
    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        doc="Record creation timestamp"
    )

    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        doc="Last update timestamp"
    )

    # Relationship
    user = relationship("User", back_populates="time_entries")

    __table_args__ = (
        Index(
            "uq_time_entries_active_user",
            "user_id",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
    )

    def __repr__(self) -> str:
        """String representation of TimeEntry."""
        return f"<TimeEntry(id={self.id}, user_id={self.user_id}, status={self.status}, in={self.clock_in_time})>"
