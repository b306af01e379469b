"""
GOES codec: ``{prefix}YYYYMMDD_HHMM{suffix}``.

Example URLs published by NOAA NESDIS:
  ftp://ftp.nnvl.noaa.gov/GOES/ABI_TrueColor/ABI_TrueColor_20231014_1500z.png
  ftp://ftp.nnvl.noaa.gov/GOES/MERGED_TrueColor/MERGED_TrueColor_20231014_1510z.png
  ftp://ftp.nnvl.noaa.gov/GOES/WST_TrueColor/WST_TrueColor_20231014_1510z.png

Resolution is one minute; seconds are dropped on encode.
"""

from datetime import datetime

from naming.codec import NameCodec, make_utc, parse_field
from naming.errors import (
    FilenameTooLong,
    FilenameTooShort,
    MissingPrefix,
    MissingSeparator,
    UnparsableDay,
    UnparsableHour,
    UnparsableMinute,
    UnparsableMonth,
    UnparsableYear,
)
from timing.util import as_utc

DEFAULT_SUFFIX = "z.png"

# YYYYMMDD_HHMM
_STAMP_LEN = 13
_SEPARATOR_AT = 8


class GoesCodec(NameCodec):
    """Fixed-width GOES imagery names with an optional product prefix."""

    kind = "goes"

    def __init__(self, prefix: str = "", suffix: str = DEFAULT_SUFFIX):
        self.prefix = prefix
        self.suffix = suffix

    def encode(self, instant: datetime) -> str:
        return f"{self.prefix}{as_utc(instant):%Y%m%d_%H%M}{self.suffix}"

    def decode(self, identifier: str) -> datetime:
        if not identifier.startswith(self.prefix):
            raise MissingPrefix(identifier, f"{identifier!r} does not start with {self.prefix!r}")
        stamp = identifier[len(self.prefix):]
        if self.suffix and stamp.endswith(self.suffix):
            stamp = stamp[:-len(self.suffix)]

        if len(stamp) < _STAMP_LEN:
            raise FilenameTooShort(identifier)
        if len(stamp) > _STAMP_LEN:
            raise FilenameTooLong(identifier)
        if stamp[_SEPARATOR_AT] != "_":
            raise MissingSeparator(identifier, f"expected '_' between date and time in {identifier!r}")

        year = parse_field(identifier, stamp[0:4], UnparsableYear)
        month = parse_field(identifier, stamp[4:6], UnparsableMonth)
        day = parse_field(identifier, stamp[6:8], UnparsableDay)
        hour = parse_field(identifier, stamp[9:11], UnparsableHour)
        minute = parse_field(identifier, stamp[11:13], UnparsableMinute)
        return make_utc(identifier, year, month, day, hour, minute)

    def __repr__(self) -> str:
        return f"<GoesCodec prefix={self.prefix!r} suffix={self.suffix!r}>"
