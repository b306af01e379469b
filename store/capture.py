"""
Captures: scheduled artifacts found in a local store, and the ones that
are still missing.

A CaptureList is a snapshot. Nothing here touches the filesystem except
Capture.valid(); the next pass rebuilds the list from scratch.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from timing.util import display_time


class NoArtifactsExpected(Exception):
    """The schedule for the window is empty, so fullness is undefined."""


@dataclass(frozen=True)
class Capture:
    """A captured artifact on local disk.

    Attributes:
        time: Instant the artifact represents (decoded from its name)
        path: Absolute path of the file
        url: Where it was fetched from, when known
    """
    time: datetime
    path: str
    url: Optional[str] = None

    def valid(self) -> bool:
        """Whether the file is still a regular file on disk."""
        return os.path.isfile(self.path)

    def __str__(self) -> str:
        return f"<Capture '{self.path}' at {display_time(self.time)}>"


@dataclass(frozen=True)
class MissingCapture:
    """A scheduled artifact not present locally.

    Attributes:
        time: Scheduled instant
        path: Expected location, relative to the store root
        resource: Remote identifier to fetch it from
    """
    time: datetime
    path: str
    resource: str

    def __str__(self) -> str:
        return f"<Missing '{self.resource}' at {display_time(self.time)}>"


@dataclass
class CaptureList:
    """Present and missing captures for one schedule, both ascending by time."""
    present: list[Capture] = field(default_factory=list)
    missing: list[MissingCapture] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.present) + len(self.missing)

    def is_empty(self) -> bool:
        return not self.present and not self.missing

    def has_captures(self) -> bool:
        return bool(self.present)

    def latest(self) -> Optional[Capture]:
        """Most recent present capture, or None."""
        return self.present[-1] if self.present else None

    def earliest_missing(self) -> Optional[MissingCapture]:
        return self.missing[0] if self.missing else None

    def full_ratio(self) -> float:
        """Fraction of the schedule present locally.

        Raises:
            NoArtifactsExpected: If nothing was scheduled
        """
        if self.total == 0:
            raise NoArtifactsExpected("no captures expected in this range")
        return len(self.present) / self.total

    def __len__(self) -> int:
        return len(self.present)

    def __str__(self) -> str:
        try:
            ratio = f", {round(self.full_ratio() * 100, 1):g}% full"
        except NoArtifactsExpected:
            ratio = ""
        return f"list of {len(self.present)} out of {self.total} captures{ratio}"


__all__ = ['Capture', 'MissingCapture', 'CaptureList', 'NoArtifactsExpected']
