from timeclock.fastapi.schemas.time_entry import TimeEntryRead, ClockOutRequest
from timeclock.fastapi.schemas.analytics import UserStats, SystemStats
from timeclock.fastapi.schemas.user import UserCreate, UserProfileUpdate, UserRead
