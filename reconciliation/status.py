"""How completely a mirror shadows its remote over the loop window."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from store.capture import CaptureList
from timing.util import display_time


class MirrorState(Enum):
    EMPTY = "empty"
    PARTIAL = "partial"
    FULL = "full"


@dataclass(frozen=True)
class MirrorStatus:
    """Classification of one diff.

    Attributes:
        state: EMPTY, PARTIAL or FULL
        timestamp: Latest present capture (PARTIAL, FULL) or earliest
                   expected instant (EMPTY)
        ratio: Fraction of the schedule present
    """
    state: MirrorState
    timestamp: datetime
    ratio: float

    @classmethod
    def from_captures(cls, captures: CaptureList) -> "MirrorStatus":
        """Classify a capture list.

        Raises:
            NoArtifactsExpected: If the list covers an empty schedule
        """
        ratio = captures.full_ratio()
        latest = captures.latest()
        if latest is None:
            return cls(MirrorState.EMPTY, captures.missing[0].time, ratio)
        if ratio < 1.0:
            return cls(MirrorState.PARTIAL, latest.time, ratio)
        return cls(MirrorState.FULL, latest.time, ratio)

    @property
    def is_full(self) -> bool:
        return self.state is MirrorState.FULL

    def __str__(self) -> str:
        when = display_time(self.timestamp)
        if self.state is MirrorState.FULL:
            return f"mirror latest {when}, fully reflected"
        if self.state is MirrorState.PARTIAL:
            return f"mirror latest {when}, only partially reflected"
        return f"mirror has no captures since {when}"
