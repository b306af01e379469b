"""
Handy functions for working with the times used across reflector.

All instants are timezone-aware UTC datetimes. Naive datetimes are
interpreted as UTC rather than local time so that schedules never depend
on the host's time zone.
"""

from datetime import datetime, timedelta, timezone

DAY = timedelta(days=1)

_MINUTE = 60
_HOUR = _MINUTE * 60
_DAY = _HOUR * 24


def as_utc(t: datetime) -> datetime:
    """Return ``t`` as an aware UTC datetime (naive input is taken to be UTC)."""
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def utc_now() -> datetime:
    """Current time as an aware UTC datetime, truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def truncate_to_day(t: datetime) -> datetime:
    """Midnight (00:00 UTC) of the day containing ``t``.

    >>> truncate_to_day(datetime(2023, 10, 14, 15, 10, tzinfo=timezone.utc))
    datetime.datetime(2023, 10, 14, 0, 0, tzinfo=datetime.timezone.utc)
    """
    t = as_utc(t)
    return t.replace(hour=0, minute=0, second=0, microsecond=0)


def since_midnight(t: datetime) -> timedelta:
    """How long since midnight happened for ``t``."""
    t = as_utc(t)
    return t - truncate_to_day(t)


def display_time(t: datetime) -> str:
    """Show an instant in UTC, ignoring resolutions below seconds.

    >>> display_time(datetime(1970, 1, 1, tzinfo=timezone.utc))
    '1970-01-01 00:00:00'
    """
    return as_utc(t).strftime("%Y-%m-%d %H:%M:%S")


def _plural(n: int) -> str:
    return "" if n == 1 else "s"


def display_duration(d: timedelta) -> str:
    """Show a duration, assuming we don't really care about sub-seconds.

    >>> display_duration(timedelta(seconds=62))
    '1 minute, 2 seconds'
    >>> display_duration(timedelta(days=1, hours=2))
    '1 day, 2 hours, 0 seconds'
    """
    parts = []
    v = int(d.total_seconds())
    if v >= _DAY:
        days = v // _DAY
        parts.append(f"{days} day{_plural(days)}")
        v %= _DAY
    if v >= _HOUR:
        hours = v // _HOUR
        parts.append(f"{hours} hour{_plural(hours)}")
        v %= _HOUR
    if v >= _MINUTE:
        minutes = v // _MINUTE
        parts.append(f"{minutes} minute{_plural(minutes)}")
        v %= _MINUTE
    parts.append(f"{v} second{_plural(v)}")
    return ", ".join(parts)
