"""
Clock and reporting-window helpers.

Timestamps are stored as naive UTC. Reporting windows (current week,
current month) are computed in a single configured time zone: the week
starts at local midnight of the most recent Sunday, the month at local
midnight of the 1st. All window functions take the reference instant and
zone explicitly so callers and tests control "now".
"""

from datetime import datetime, time, timedelta, timezone, tzinfo
from typing import Optional

import pytz


def utcnow() -> datetime:
    """Current instant as naive UTC, the storage representation."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def resolve_timezone(name: Optional[str] = None) -> Optional[tzinfo]:
    """
    Resolve the reporting time zone.

    Args:
        name: IANA zone name (e.g. "America/Chicago"); empty or None
            means the server's local zone

    Returns:
        tzinfo instance, or None for the server's local zone; local offsets
        are then looked up per date so DST changes are honoured

    Raises:
        pytz.UnknownTimeZoneError: If the name is not a known zone
    """
    if name:
        return pytz.timezone(name)
    return None


def _localize(tz: Optional[tzinfo], naive: datetime) -> datetime:
    if tz is None:
        return naive.astimezone()
    # pytz zones need localize() to pick the right offset
    if hasattr(tz, "localize"):
        return tz.localize(naive)
    return naive.replace(tzinfo=tz)


def _to_local(reference: datetime, tz: Optional[tzinfo]) -> datetime:
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)
    return reference.astimezone(tz)


def to_storage(moment: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive input is assumed UTC."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def week_start(reference: datetime, tz: Optional[tzinfo]) -> datetime:
    """
    Local midnight of the most recent Sunday at or before ``reference``.

    Args:
        reference: Instant to measure from; naive values are read as UTC
        tz: Reporting time zone; None means server local time

    Returns:
        Aware datetime in ``tz``

    Example:
        >>> import pytz
        >>> tz = pytz.timezone("UTC")
        >>> week_start(datetime(2026, 10, 21, 15, 0), tz).date().isoformat()
        '2026-10-18'
    """
    local = _to_local(reference, tz)
    # Python weekday(): Monday=0 .. Sunday=6; days since Sunday
    days_since_sunday = (local.weekday() + 1) % 7
    start_date = local.date() - timedelta(days=days_since_sunday)
    return _localize(tz, datetime.combine(start_date, time.min))


def month_start(reference: datetime, tz: Optional[tzinfo]) -> datetime:
    """Local midnight of the 1st of the month containing ``reference``."""
    local = _to_local(reference, tz)
    return _localize(tz, datetime.combine(local.date().replace(day=1), time.min))


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """
    Whole minutes between two instants, truncating any partial minute.

    Example:
        >>> elapsed_minutes(datetime(2026, 1, 1, 9, 0), datetime(2026, 1, 1, 11, 5, 59))
        125
    """
    # A clock that stepped backwards must not produce negative totals
    return max(0, (end - start) // timedelta(minutes=1))


def split_minutes(total_minutes: int) -> tuple[int, int]:
    """Split a minute total into (hours, minutes) for display."""
    return total_minutes // 60, total_minutes % 60
