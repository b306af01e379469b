"""
Name codecs mapping sample instants to source identifiers and back.

Classes:
    NameCodec: Abstract codec capability
    IdentityCodec: ISO 8601 timestamps
    GoesCodec: GOES imagery ``{prefix}YYYYMMDD_HHMM{suffix}``
    SdoCodec: SDO daily movies ``YYYY/MM/DD/YYYYMMDD{suffix}``
    StrftimeCodec: Arbitrary pattern in a named time zone

Functions:
    new_codec: Build a codec from its configured kind
    flatten_identifier: Collapse nested identifiers to a filename
"""
from naming.errors import (
    CodecError,
    FilenameTooShort,
    FilenameTooLong,
    MissingPrefix,
    MissingSeparator,
    UnparsableField,
    UnparsableYear,
    UnparsableMonth,
    UnparsableDay,
    UnparsableHour,
    UnparsableMinute,
    TimestampParseError,
    AmbiguousLocalTime,
    NonexistentLocalTime,
    ImpossibleTimestamp,
    UnknownCodec,
    NoCodecName,
)
from naming.codec import NameCodec
from naming.identity import IdentityCodec
from naming.goes import GoesCodec
from naming.sdo import SdoCodec
from naming.zoned import StrftimeCodec
from naming.factory import new_codec, codec_kinds
from naming.flatten import flatten_identifier

__all__ = [
    'CodecError',
    'FilenameTooShort',
    'FilenameTooLong',
    'MissingPrefix',
    'MissingSeparator',
    'UnparsableField',
    'UnparsableYear',
    'UnparsableMonth',
    'UnparsableDay',
    'UnparsableHour',
    'UnparsableMinute',
    'TimestampParseError',
    'AmbiguousLocalTime',
    'NonexistentLocalTime',
    'ImpossibleTimestamp',
    'UnknownCodec',
    'NoCodecName',
    'NameCodec',
    'IdentityCodec',
    'GoesCodec',
    'SdoCodec',
    'StrftimeCodec',
    'new_codec',
    'codec_kinds',
    'flatten_identifier',
]
