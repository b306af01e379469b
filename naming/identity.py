"""Identity codec: the identifier is the ISO 8601 timestamp itself.

Round-trips exactly, seconds and microseconds included. Mostly useful for
tests and for sources that name files by plain timestamps.
"""

from datetime import datetime, timezone

from naming.codec import NameCodec
from naming.errors import TimestampParseError


class IdentityCodec(NameCodec):
    """``2023-10-14T15:00:00+00:00`` <-> 2023-10-14 15:00 UTC."""

    kind = "identity"

    def encode(self, instant: datetime) -> str:
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        return instant.astimezone(timezone.utc).isoformat()

    def decode(self, identifier: str) -> datetime:
        try:
            t = datetime.fromisoformat(identifier)
        except ValueError as e:
            raise TimestampParseError(identifier, f"not an ISO 8601 timestamp: {identifier!r}") from e
        if t.tzinfo is None:
            return t.replace(tzinfo=timezone.utc)
        return t.astimezone(timezone.utc)
