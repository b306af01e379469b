"""
Sample schedules: the exact ordered set of instants at which a source
publishes within a time window.

A schedule is a pure function of its window, period and offset. It never
reads the clock; callers resolve "now" once and pass a concrete window.

Alignment: instants fall on ``midnight + offset + k * period``. Periods
that do not evenly divide a day are anchored on the day containing the
window start and then stepped forward without re-anchoring, so they drift
relative to later midnights. That is a known limitation, not corrected.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Iterator

from timing.errors import DurationOverflow, InvalidOffset, InvalidPeriod
from timing.util import DAY, display_time, truncate_to_day
from timing.window import TimeWindow


@dataclass(frozen=True)
class SampleSchedule:
    """Ordered, duplicate-free instants derived from a window.

    Attributes:
        window: Window the instants were generated from
        period: Interval between instants
        offset: Sub-day phase of the instants
        instants: Ascending instants, all inside ``window``
    """
    window: TimeWindow
    period: timedelta
    offset: timedelta = timedelta(0)
    instants: tuple[datetime, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.instants)

    def __iter__(self) -> Iterator[datetime]:
        return iter(self.instants)

    def __getitem__(self, index):
        return self.instants[index]

    def __str__(self) -> str:
        return "[" + ", ".join(display_time(t) for t in self.instants) + "]"


def validate_period(period: timedelta, offset: timedelta = timedelta(0)) -> None:
    """Raise if ``period`` or ``offset`` cannot produce a schedule."""
    if period <= timedelta(0):
        raise InvalidPeriod(f"period must be positive, got {period}")
    if offset < timedelta(0) or offset >= DAY:
        raise InvalidOffset(f"offset must be within [0, 1 day), got {offset}")


def first_instant(start: datetime, period: timedelta, offset: timedelta = timedelta(0)) -> datetime:
    """Most recent period boundary at or before ``start``.

    The boundary is found relative to the midnight preceding
    ``start - offset``, so an offset pushing ``start`` back across midnight
    anchors on the previous day.

    Raises:
        DurationOverflow: If ``start - offset`` is before the earliest datetime
    """
    try:
        shifted = start - offset
    except OverflowError as e:
        raise DurationOverflow(f"cannot subtract offset {offset} from {start.isoformat()}") from e
    midnight = truncate_to_day(shifted)
    k = (shifted - midnight) // period
    return midnight + offset + k * period


def generate(window: TimeWindow, period: timedelta, offset: timedelta = timedelta(0)) -> SampleSchedule:
    """Generate every scheduled instant inside ``window``.

    Args:
        window: Window to cover; both boundaries are inclusive
        period: Interval between instants, > 0
        offset: Publication phase after midnight UTC, in [0, 1 day)

    Returns:
        SampleSchedule with instants in ascending order

    Raises:
        InvalidPeriod: period <= 0
        InvalidOffset: offset outside [0, 1 day)
        DurationOverflow: window starts too close to the earliest datetime for the offset
    """
    validate_period(period, offset)

    instants = []
    t = first_instant(window.start, period, offset)
    if t < window.start:
        if window.end - t < period:
            return SampleSchedule(window=window, period=period, offset=offset)
        t += period

    # never step past end, which may sit at datetime.max
    while True:
        instants.append(t)
        if window.end - t < period:
            break
        t += period

    return SampleSchedule(window=window, period=period, offset=offset, instants=tuple(instants))
