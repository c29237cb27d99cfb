"""
DateTime helpers.

All persisted timestamps are timezone-aware UTC. PyMongo hands datetimes back
as naive values that represent UTC, so anything read from the store goes
through ensure_utc() before it is compared with utc_now().
"""
from datetime import datetime, timezone as dt_timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Get current UTC time as a timezone-aware datetime.

    Use this for all timestamps that will be persisted to MongoDB (BSON Date).
    """
    return datetime.now(dt_timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime into a timezone-aware UTC datetime.

    - If dt is None -> None
    - If dt is naive -> assume it represents UTC (this matches MongoDB/PyMongo behavior)
    - If dt is aware -> convert to UTC
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt.astimezone(dt_timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Convert datetime object to an ISO 8601 UTC string ("...Z").

    Args:
        dt: datetime object (timezone-aware or naive UTC)

    Returns:
        ISO 8601 formatted string, or None if dt is None
    """
    dt = ensure_utc(dt)
    if dt is None:
        return None
    return dt.replace(microsecond=0).isoformat().replace("+00:00", "Z")
