"""
Name codecs: bidirectional mapping between a sample instant and the
identifier a source publishes it under.

One codec exists per upstream naming convention. All satisfy the same
two-operation contract:

    encode(instant) -> identifier     total, never fails
    decode(identifier) -> instant     raises CodecError on malformed input

and the round-trip law ``decode(encode(t)) == t`` for every instant at the
codec's resolution (GOES drops seconds, SDO drops the time of day).
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable

from naming.errors import ImpossibleTimestamp, UnparsableField


class NameCodec(ABC):
    """Capability to turn instants into identifiers and back."""

    kind: str = ""

    @abstractmethod
    def encode(self, instant: datetime) -> str:
        """Identifier for ``instant``."""

    @abstractmethod
    def decode(self, identifier: str) -> datetime:
        """Instant (aware UTC) named by ``identifier``."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} codec>"


def parse_field(
    identifier: str,
    text: str,
    error: Callable[..., UnparsableField],
) -> int:
    """Parse a fixed-width numeric field, raising ``error`` on anything but digits."""
    if not (text.isascii() and text.isdigit()):
        raise error(identifier, f"{error.__name__}: {text!r} in {identifier!r}")
    return int(text)


def make_utc(
    identifier: str,
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Build an aware UTC datetime, raising ImpossibleTimestamp for invalid fields."""
    try:
        return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
    except ValueError as e:
        raise ImpossibleTimestamp(
            identifier,
            f"impossible timestamp {year:04d}-{month:02d}-{day:02d} "
            f"{hour:02d}:{minute:02d}:{second:02d} in {identifier!r}: {e}",
        ) from e
