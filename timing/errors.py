"""
Scheduling errors.

These are programmer or configuration errors: they are raised immediately
and never retried.
"""


class ScheduleError(Exception):
    """Base class for time window and schedule errors."""


class InvalidWindow(ScheduleError):
    """Window start is after its end."""


class DurationOverflow(ScheduleError):
    """A duration cannot be subtracted from an instant (too close to the epoch or datetime.min)."""


class InvalidPeriod(ScheduleError):
    """Sampling period is zero or negative."""


class InvalidOffset(ScheduleError):
    """Sub-day offset is negative or not shorter than a day."""


__all__ = [
    'ScheduleError',
    'InvalidWindow',
    'DurationOverflow',
    'InvalidPeriod',
    'InvalidOffset',
]
