"""
strftime codec: identifiers built from an arbitrary ``strftime`` pattern
evaluated in a named time zone.

Some sources stamp files with local wall-clock time. Local time is not a
bijection with UTC: during a DST overlap a wall-clock time occurs twice,
during a DST gap it never occurs. Decoding surfaces both cases as errors
(AmbiguousLocalTime, NonexistentLocalTime) instead of guessing.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from naming.codec import NameCodec
from naming.errors import AmbiguousLocalTime, NonexistentLocalTime, TimestampParseError
from timing.util import as_utc


def resolve_local(identifier: str, naive: datetime, zone: ZoneInfo) -> datetime:
    """Map a naive wall-clock time in ``zone`` to UTC, refusing gaps and overlaps."""
    early = naive.replace(tzinfo=zone, fold=0)
    late = naive.replace(tzinfo=zone, fold=1)
    if early.utcoffset() != late.utcoffset():
        back = early.astimezone(timezone.utc).astimezone(zone).replace(tzinfo=None)
        if back == naive:
            raise AmbiguousLocalTime(
                identifier, f"{naive.isoformat()} occurs twice in {zone.key} ({identifier!r})"
            )
        raise NonexistentLocalTime(
            identifier, f"{naive.isoformat()} does not occur in {zone.key} ({identifier!r})"
        )
    return early.astimezone(timezone.utc)


class StrftimeCodec(NameCodec):
    """Identifier = ``instant.astimezone(zone).strftime(pattern)``.

    Args:
        pattern: strftime/strptime pattern, e.g. ``"HIMDAILY%Y-%m-%d-%H%M%S.JPG"``
        timezone: IANA zone name the pattern is evaluated in (default "UTC")
    """

    kind = "strftime"

    def __init__(self, pattern: str, timezone: str = "UTC"):
        if not pattern:
            raise ValueError("strftime codec requires a pattern")
        self.pattern = pattern
        self.zone = ZoneInfo(timezone)

    def encode(self, instant: datetime) -> str:
        return as_utc(instant).astimezone(self.zone).strftime(self.pattern)

    def decode(self, identifier: str) -> datetime:
        try:
            parsed = datetime.strptime(identifier, self.pattern)
        except ValueError as e:
            raise TimestampParseError(
                identifier, f"{identifier!r} does not match {self.pattern!r}: {e}"
            ) from e
        if parsed.tzinfo is not None:
            # pattern carried its own offset (%z)
            return parsed.astimezone(timezone.utc)
        return resolve_local(identifier, parsed, self.zone)

    def __repr__(self) -> str:
        return f"<StrftimeCodec pattern={self.pattern!r} timezone={self.zone.key!r}>"
