"""
Pydantic schemas for time tracking statistics.
"""

from pydantic import Field

from timeclock.fastapi.schemas.common import CamelModel


class UserStats(CamelModel):
    """Current week and month totals for one user, split into hours and minutes."""

    weekly_hours: int = Field(..., description="Whole hours worked this week")
    weekly_minutes: int = Field(..., description="Remaining minutes worked this week (0-59)")
    monthly_hours: int = Field(..., description="Whole hours worked this month")
    monthly_minutes: int = Field(..., description="Remaining minutes worked this month (0-59)")


class SystemStats(CamelModel):
    """System-wide statistics for the admin dashboard."""

    total_employees: int = Field(..., description="Number of active user accounts")
    active_sessions: int = Field(..., description="Number of entries currently clocked in")
    weekly_hours: int = Field(
        ...,
        description="Sum of completed minutes of entries clocked in this week, all users"
    )
    avg_hours: float = Field(
        ...,
        description="weeklyHours divided by the number of entries clocked in this week (0 if none)"
    )
