from timeclock.fastapi.models.user import User
from timeclock.fastapi.models.time_entry import TimeEntry, TimeEntryStatus

__all__ = ["User", "TimeEntry", "TimeEntryStatus"]
