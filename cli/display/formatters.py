"""Pure formatting functions for display output."""

from datetime import datetime, timezone


def format_relative_time(dt: datetime, now: datetime | None = None) -> str:
    """Format datetime as relative time.

    Args:
        dt: Datetime to format.
        now: Reference time (defaults to the current UTC time).

    Returns:
        Formatted time string (e.g., "2h ago", "1w ago", "3mo ago", "1y ago").
    """
    if dt.tzinfo is None:
        # If no timezone, assume UTC
        dt = dt.replace(tzinfo=timezone.utc)

    now = now or datetime.now(timezone.utc)
    time_diff = now - dt

    if time_diff.days < 0:
        return "just now"
    if time_diff.days == 0:
        if time_diff.seconds < 60:
            return "just now"
        elif time_diff.seconds < 3600:
            return f"{time_diff.seconds // 60}m ago"
        else:
            return f"{time_diff.seconds // 3600}h ago"
    elif time_diff.days < 7:
        return f"{time_diff.days}d ago"
    elif time_diff.days < 30:
        return f"{time_diff.days // 7}w ago"
    elif time_diff.days < 365:
        return f"{time_diff.days // 30}mo ago"
    else:
        return f"{time_diff.days // 365}y ago"


def format_time_range(start: datetime, end: datetime) -> str:
    """Format start and end as HH:MM-HH:MM."""
    return f"{start.strftime('%H:%M')}-{end.strftime('%H:%M')}"
