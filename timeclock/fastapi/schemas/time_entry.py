"""
Pydantic schemas for TimeEntry serialization and clock-out requests.

Responses use camelCase keys (``clockInTime``, ``totalHours``) to match
the web client; stored naive UTC timestamps are emitted as UTC.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import Field, field_validator

from timeclock.fastapi.models.time_entry import TimeEntryStatus
from timeclock.fastapi.schemas.common import CamelModel, as_utc


class TimeEntryRead(CamelModel):
    """Schema for reading a time entry."""

    id: UUID = Field(..., description="Time entry unique identifier")
    user_id: UUID = Field(..., description="User who owns this entry")
    clock_in_time: datetime = Field(..., description="When the user clocked in")
    clock_out_time: Optional[datetime] = Field(None, description="When the user clocked out")
    status: TimeEntryStatus = Field(..., description="active or completed")
    total_hours: Optional[int] = Field(
        None,
        description="Elapsed whole minutes, present once completed"
    )
    employee_signature: Optional[str] = Field(None, description="Employee signature data URI")
    supervisor_signature: Optional[str] = Field(None, description="Supervisor signature data URI")
    created_at: datetime = Field(..., description="Record creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    @field_validator("clock_in_time", "clock_out_time", "created_at", "updated_at")
    @classmethod
    def mark_utc(cls, v):
        """Stored timestamps are naive UTC."""
        return as_utc(v)


class ClockOutRequest(CamelModel):
    """Schema for clock-out requests."""

    employee_signature: str = Field(
        ...,
        description="Employee signature as a base64 image data URI",
        examples=["data:image/png;base64,iVBORw0KGgo="]
    )

    supervisor_signature: str = Field(
        ...,
        description="Supervisor signature as a base64 image data URI",
        examples=["data:image/png;base64,iVBORw0KGgo="]
    )

