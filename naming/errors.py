"""
Name codec errors.

Decoding failures carry the identifier (or the part of it) that could not
be understood. Factory errors (UnknownCodec, NoCodecName) are configuration
errors.
"""


class CodecError(ValueError):
    """Base class for identifier decoding failures."""

    def __init__(self, identifier: str, message: str = ""):
        self.identifier = identifier
        super().__init__(message or f"{type(self).__name__}: {identifier!r}")


class FilenameTooShort(CodecError):
    """Identifier is shorter than the codec's fixed-width layout."""


class FilenameTooLong(CodecError):
    """Identifier is longer than the codec's fixed-width layout."""


class MissingPrefix(CodecError):
    """Identifier does not start with the configured prefix."""


class MissingSeparator(CodecError):
    """Fixed separator between date and time fields is absent."""


class UnparsableField(CodecError):
    """A numeric field could not be parsed."""


class UnparsableYear(UnparsableField):
    pass


class UnparsableMonth(UnparsableField):
    pass


class UnparsableDay(UnparsableField):
    pass


class UnparsableHour(UnparsableField):
    pass


class UnparsableMinute(UnparsableField):
    pass


class TimestampParseError(CodecError):
    """Identifier does not match the codec's timestamp pattern."""


class AmbiguousLocalTime(CodecError):
    """Wall-clock time occurs twice in the codec's time zone (DST overlap)."""


class NonexistentLocalTime(CodecError):
    """Wall-clock time never occurs in the codec's time zone (DST gap)."""


class ImpossibleTimestamp(CodecError):
    """Fields parsed but do not form a calendar date/time (e.g. month 13)."""


class UnknownCodec(Exception):
    """Configured codec kind is not registered."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"unknown codec {kind!r}")


class NoCodecName(Exception):
    """No codec kind configured."""


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
]
