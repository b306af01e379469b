"""A closed time window ``[start, end]`` of UTC instants."""

from dataclasses import dataclass
from datetime import datetime, timedelta

from timing.errors import DurationOverflow, InvalidWindow
from timing.util import as_utc, display_time


@dataclass(frozen=True)
class TimeWindow:
    """Immutable window of time, inclusive at both ends.

    A zero-width window (start == end) is valid and denotes "empty".

    Attributes:
        start: Earliest instant in the window (aware UTC)
        end: Latest instant in the window (aware UTC)
    """
    start: datetime
    end: datetime

    def __post_init__(self):
        start = as_utc(self.start)
        end = as_utc(self.end)
        if start > end:
            raise InvalidWindow(
                f"window start {display_time(start)} is after end {display_time(end)}"
            )
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, 'start', start)
        object.__setattr__(self, 'end', end)

    @classmethod
    def ending_at(cls, now: datetime, duration: timedelta) -> "TimeWindow":
        """Build ``[now - duration, now]``.

        Raises:
            DurationOverflow: If ``now - duration`` is not representable.
            InvalidWindow: If ``duration`` is negative.
        """
        now = as_utc(now)
        try:
            then = now - duration
        except OverflowError as e:
            raise DurationOverflow(f"cannot subtract {duration} from {now.isoformat()}") from e
        return cls(then, now)

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, t: datetime) -> bool:
        """True if ``t`` lies inside the window, boundaries included."""
        return self.start <= as_utc(t) <= self.end

    def __str__(self) -> str:
        return f"[{display_time(self.start)} .. {display_time(self.end)}]"
