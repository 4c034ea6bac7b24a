"""Time helpers shared by the planner and the services."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Convert a datetime to aware UTC; naive values are taken to be UTC already."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_clock(dt: datetime) -> str:
    """Format a datetime as 'YYYY-MM-DD HH:MM UTC'."""
    return ensure_utc(dt).strftime("%Y-%m-%d %H:%M UTC")
