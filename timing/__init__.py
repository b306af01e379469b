"""Time windows and sample schedules."""
from timing.errors import (
    ScheduleError,
    InvalidWindow,
    DurationOverflow,
    InvalidPeriod,
    InvalidOffset,
)
from timing.window import TimeWindow
from timing.schedule import SampleSchedule, generate, first_instant

__all__ = [
    'ScheduleError',
    'InvalidWindow',
    'DurationOverflow',
    'InvalidPeriod',
    'InvalidOffset',
    'TimeWindow',
    'SampleSchedule',
    'generate',
    'first_instant',
]
