"""Select a name codec by its configured kind."""

from typing import Callable, Optional

from naming.codec import NameCodec
from naming.errors import NoCodecName, UnknownCodec
from naming.goes import DEFAULT_SUFFIX, GoesCodec
from naming.identity import IdentityCodec
from naming.sdo import SdoCodec
from naming.zoned import StrftimeCodec


def _goes(prefix, suffix, pattern, timezone) -> NameCodec:
    return GoesCodec(prefix=prefix or "", suffix=DEFAULT_SUFFIX if suffix is None else suffix)


def _sdo(prefix, suffix, pattern, timezone) -> NameCodec:
    return SdoCodec(suffix=suffix or "")


def _identity(prefix, suffix, pattern, timezone) -> NameCodec:
    return IdentityCodec()


def _strftime(prefix, suffix, pattern, timezone) -> NameCodec:
    return StrftimeCodec(pattern=pattern or "", timezone=timezone or "UTC")


# Kind (case-insensitive) to constructor
CODECS: dict[str, Callable[..., NameCodec]] = {
    'identity': _identity,
    'goes': _goes,
    'goes-r': _goes,
    'sdo': _sdo,
    'strftime': _strftime,
}


def codec_kinds() -> list[str]:
    return sorted(CODECS)


def new_codec(
    kind: str,
    prefix: Optional[str] = None,
    suffix: Optional[str] = None,
    pattern: Optional[str] = None,
    timezone: Optional[str] = None,
) -> NameCodec:
    """Build the codec registered under ``kind``.

    Args:
        kind: "identity", "GOES" (or "GOES-R"), "SDO" or "strftime"
        prefix: GOES product prefix, e.g. "ABI_TrueColor_"
        suffix: Text following the timestamp; GOES defaults to "z.png"
        pattern: strftime pattern (strftime codec only)
        timezone: IANA zone name (strftime codec only)

    Raises:
        NoCodecName: kind is empty
        UnknownCodec: kind is not registered
    """
    if not kind:
        raise NoCodecName("no codec configured")
    try:
        make = CODECS[kind.lower()]
    except KeyError:
        raise UnknownCodec(kind) from None
    return make(prefix, suffix, pattern, timezone)
