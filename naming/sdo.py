"""
SDO codec: daily captures in per-day directories,
``YYYY/MM/DD/YYYYMMDD{suffix}``.

Example URLs from the Solar Dynamics Observatory daily movies:
  https://sdo.gsfc.nasa.gov/assets/img/dailymov/2023/09/23/20230923_1024_0094.ogv
  https://sdo.gsfc.nasa.gov/assets/img/dailymov/2023/10/13/20231013_588_SDO_VO2.mp4

Only the last path component is decoded, so flattened local names
(``20231013_588_SDO_VO2.mp4``) decode to the same day.
"""

from datetime import datetime

from naming.codec import NameCodec, make_utc, parse_field
from naming.errors import (
    FilenameTooLong,
    FilenameTooShort,
    UnparsableDay,
    UnparsableMonth,
    UnparsableYear,
)
from timing.util import as_utc

# YYYYMMDD
_STAMP_LEN = 8


class SdoCodec(NameCodec):
    kind = "sdo"

    def __init__(self, suffix: str = ""):
        self.suffix = suffix

    def encode(self, instant: datetime) -> str:
        return f"{as_utc(instant):%Y/%m/%d/%Y%m%d}{self.suffix}"

    def decode(self, identifier: str) -> datetime:
        base = identifier
        if self.suffix and base.endswith(self.suffix):
            base = base[:-len(self.suffix)]
        # everything after the last slash
        base = base.rsplit("/", 1)[-1]

        if len(base) < _STAMP_LEN:
            raise FilenameTooShort(identifier)
        if len(base) > _STAMP_LEN:
            raise FilenameTooLong(identifier)

        year = parse_field(identifier, base[0:4], UnparsableYear)
        month = parse_field(identifier, base[4:6], UnparsableMonth)
        day = parse_field(identifier, base[6:8], UnparsableDay)
        return make_utc(identifier, year, month, day)

    def __repr__(self) -> str:
        return f"<SdoCodec suffix={self.suffix!r}>"
