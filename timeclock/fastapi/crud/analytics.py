"""
Analytics queries over time entries.

Every statistic is recomputed from the stored entries on each call.
Reporting windows use one time zone (``TIMEZONE`` setting, server local
time when unset) for per-user and system figures alike.
"""

from datetime import datetime, tzinfo
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import func

from timeclock.fastapi.core.init_settings import global_settings
from timeclock.fastapi.core.utils import (
    month_start, resolve_timezone, split_minutes, to_storage, utcnow, week_start
)
from timeclock.fastapi.crud.user import UserCRUD
from timeclock.fastapi.models.time_entry import TimeEntry, TimeEntryStatus
from timeclock.fastapi.schemas.analytics import SystemStats, UserStats


class AnalyticsCRUD:
    """Aggregate queries for dashboards."""

    def __init__(self, db: Session, tz: Optional[tzinfo] = None):
        """
        Initialize with database session.

        Args:
            db: Database session
            tz: Reporting time zone; defaults to the configured zone
        """
        self.db = db
        self.tz = tz or resolve_timezone(global_settings.TIMEZONE)

    def _window_start(self, kind: str, now: Optional[datetime]) -> datetime:
        reference = now or utcnow()
        if kind == "week":
            start = week_start(reference, self.tz)
        else:
            start = month_start(reference, self.tz)
        return to_storage(start)

    def _minutes_since(self, since: datetime, user_id: Optional[UUID] = None) -> int:
        # SUM skips NULL, so active entries add nothing
        query = self.db.query(func.coalesce(func.sum(TimeEntry.total_hours), 0)).filter(
            TimeEntry.clock_in_time >= since
        )
        if user_id is not None:
            query = query.filter(TimeEntry.user_id == user_id)
        return int(query.scalar() or 0)

    def get_user_weekly_minutes(self, user_id: UUID, now: Optional[datetime] = None) -> int:
        """
        Minutes worked by a user in entries clocked in since the start of the week.

        Args:
            user_id: User UUID
            now: Reference instant (defaults to current time)

        Returns:
            Total completed minutes
        """
        return self._minutes_since(self._window_start("week", now), user_id)

    def get_user_monthly_minutes(self, user_id: UUID, now: Optional[datetime] = None) -> int:
        """Minutes worked by a user in entries clocked in since the 1st of the month."""
        return self._minutes_since(self._window_start("month", now), user_id)

    def get_user_stats(self, user_id: UUID, now: Optional[datetime] = None) -> UserStats:
        """Weekly and monthly totals split into hours and minutes."""
        weekly_hours, weekly_minutes = split_minutes(self.get_user_weekly_minutes(user_id, now))
        monthly_hours, monthly_minutes = split_minutes(self.get_user_monthly_minutes(user_id, now))

        return UserStats(
            weekly_hours=weekly_hours,
            weekly_minutes=weekly_minutes,
            monthly_hours=monthly_hours,
            monthly_minutes=monthly_minutes
        )

    def get_system_stats(self, now: Optional[datetime] = None) -> SystemStats:
        """
        System-wide statistics.

        ``weekly_hours`` is the minute total of all entries clocked in this
        week, and ``avg_hours`` divides it by the number of those entries,
        active ones included.

        Args:
            now: Reference instant (defaults to current time)

        Returns:
            SystemStats
        """
        since = self._window_start("week", now)

        total_employees = UserCRUD(self.db).count_users()

        active_sessions = (self.db.query(TimeEntry)
                           .filter(TimeEntry.status == TimeEntryStatus.ACTIVE)
                           .count())

        weekly_minutes, entry_count = (self.db.query(
            func.coalesce(func.sum(TimeEntry.total_hours), 0),
            func.count(TimeEntry.id)
        ).filter(TimeEntry.clock_in_time >= since).one())

        weekly_minutes = int(weekly_minutes or 0)
        avg_minutes = weekly_minutes / entry_count if entry_count > 0 else 0.0

        return SystemStats(
            total_employees=total_employees,
            active_sessions=active_sessions,
            weekly_hours=weekly_minutes,
            avg_hours=avg_minutes
        )


# Convenience functions
def get_user_weekly_minutes(db: Session, user_id: UUID, now: Optional[datetime] = None) -> int:
    """Get a user's minutes for the current week."""
    return AnalyticsCRUD(db).get_user_weekly_minutes(user_id, now)


def get_user_monthly_minutes(db: Session, user_id: UUID, now: Optional[datetime] = None) -> int:
    """Get a user's minutes for the current month."""
    return AnalyticsCRUD(db).get_user_monthly_minutes(user_id, now)


def get_user_stats(db: Session, user_id: UUID, now: Optional[datetime] = None) -> UserStats:
    """Get a user's weekly and monthly totals."""
    return AnalyticsCRUD(db).get_user_stats(user_id, now)


def get_system_stats(db: Session, now: Optional[datetime] = None) -> SystemStats:
    """Get system-wide statistics."""
    return AnalyticsCRUD(db).get_system_stats(now)
