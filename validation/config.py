"""
Configuration validation for reflector.

Provides pydantic v2 models for validating mirror source configuration
with fail-fast behavior and sensible defaults. Configuration files are
YAML, a list of sources under a ``sources`` key::

    sources:
      - name: Solar Data Observatory
        abbrev: sdo
        remote: https://sdo.gsfc.nasa.gov/assets/img/dailymov
        local: ~/sat/sdo
        codec: SDO
        suffix: _1024_0193.mp4
        period: 86400
        flatten: true
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator, ValidationError
from typing import Iterable, Optional
from urllib.parse import urlsplit
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging
import os

import yaml

from naming.factory import codec_kinds

log = logging.getLogger('reflector.config')

# URL schemes a remote client exists for
REMOTE_SCHEMES = ('http', 'https', 'ftp')

# Seconds a codec's names can distinguish; period and offset must be multiples
# of it or decoded capture times drift from the schedule
CODEC_RESOLUTION = {
    'goes': 60,
    'goes-r': 60,
    'sdo': 86400,
}


class ConfigError(Exception):
    """Configuration could not be read or is invalid."""


class SourceNotFound(LookupError):
    """No configured source matches a name or abbreviation."""


class SourceConfig(BaseModel):
    """
    One mirrored source.

    Required:
        name: Display name (e.g., "GOES ABI_TrueColor")
        remote: http, https or ftp URL of the directory holding the captures
        local: Local store directory (``~`` is expanded)
        codec: Name codec kind: identity, GOES, GOES-R, SDO, strftime
               (``pathmaker`` is accepted as an alias)
        period: Seconds between captures (> 0)

    Optional tunables:
        abbrev: Short name for selecting the source on the command line
        prefix: Text before the timestamp (GOES)
        suffix: Text after the timestamp (GOES, SDO)
        pattern: strftime pattern (strftime codec)
        timezone: IANA zone the pattern is evaluated in (default: UTC)
        offset: Seconds after midnight UTC of the first capture (default: 0, range: 0-86399)
        loop_period: Seconds evaluated and filled per run (default: 86400)
        flatten: Store nested identifiers under their last path component (default: False)
        username, password: Remote credentials (default: anonymous)
        timeout: Connect timeout in seconds (default: 30)
    """

    # Required fields
    name: str
    remote: str
    local: str
    codec: str = Field(validation_alias=AliasChoices('codec', 'pathmaker'))
    period: int = Field(gt=0)

    # Naming
    abbrev: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    pattern: Optional[str] = None
    timezone: Optional[str] = None

    # Schedule
    offset: int = Field(default=0, ge=0, le=86399)
    loop_period: int = Field(default=86400, ge=0)

    flatten: bool = False

    # Remote connection
    username: Optional[str] = None
    password: Optional[str] = None
    timeout: float = Field(default=30.0, gt=0.0, le=600.0)

    @field_validator('name', mode='after')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('name is required')
        return v

    @field_validator('remote', mode='after')
    @classmethod
    def validate_remote(cls, v: str) -> str:
        """Validate remote is an http, https or ftp URL with a host."""
        parts = urlsplit(v)
        if parts.scheme.lower() not in REMOTE_SCHEMES:
            raise ValueError(f"remote must start with one of {REMOTE_SCHEMES}, got: {v}")
        if not parts.hostname:
            raise ValueError(f"remote has no host: {v}")
        return v

    @field_validator('local', mode='after')
    @classmethod
    def validate_local(cls, v: str) -> str:
        if not v:
            raise ValueError('local is required')
        return os.path.expanduser(v)

    @field_validator('codec', mode='before')
    @classmethod
    def validate_codec(cls, v):
        """Validate codec is a registered kind (case-insensitive)."""
        valid = codec_kinds()
        if isinstance(v, str) and v.lower() in valid:
            return v.lower()
        raise ValueError(f"codec must be one of {tuple(valid)}, got: {v}")

    @field_validator('timezone', mode='after')
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown time zone: {v}") from e
        return v

    @field_validator('flatten', mode='before')
    @classmethod
    def validate_booleans(cls, v):
        """Ensure boolean fields are actual booleans, not truthy strings."""
        if isinstance(v, bool):
            return v
        if isinstance(v, str):
            lower = v.lower()
            if lower in ('true', '1', 'yes'):
                return True
            if lower in ('false', '0', 'no'):
                return False
            raise ValueError(f"Invalid boolean value: {v}")
        raise ValueError(f"Expected boolean, got {type(v).__name__}")

    @model_validator(mode='after')
    def validate_pattern(self) -> "SourceConfig":
        if self.codec == 'strftime' and not self.pattern:
            raise ValueError("strftime codec requires a pattern")
        return self

    @model_validator(mode='after')
    def validate_resolution(self) -> "SourceConfig":
        """Reject periods and offsets finer than the codec can name."""
        resolution = CODEC_RESOLUTION.get(self.codec)
        if resolution is None:
            return self
        if self.period % resolution or self.offset % resolution:
            raise ValueError(
                f"{self.codec} names resolve to {resolution}s: period ({self.period}s) "
                f"and offset ({self.offset}s) must be multiples of it"
            )
        return self

    def matches(self, key: str) -> bool:
        """Whether ``key`` names this source (name or abbrev, case-insensitive)."""
        key = key.lower()
        return key == self.name.lower() or (self.abbrev is not None and key == self.abbrev.lower())

    def log_config(self) -> None:
        """Log configuration with masked password for security."""
        if self.password and len(self.password) > 8:
            masked = self.password[:2] + '****' + self.password[-2:]
        elif self.password:
            masked = '****'
        else:
            masked = None
        auth = f"user={self.username}, password={masked}" if self.username else "auth=anonymous"
        log.info(
            f"source {self.name!r}: remote={self.remote}, local={self.local}, "
            f"codec={self.codec}, period={self.period}s, offset={self.offset}s, "
            f"loop_period={self.loop_period}s, flatten={self.flatten}, {auth}"
        )


class ReflectorConfig(BaseModel):
    """All configured sources plus where run state is kept."""

    sources: list[SourceConfig] = Field(min_length=1)
    data_dir: Optional[str] = None

    @field_validator('data_dir', mode='after')
    @classmethod
    def validate_data_dir(cls, v: Optional[str]) -> Optional[str]:
        return os.path.expanduser(v) if v else None

    @model_validator(mode='after')
    def validate_unique_names(self) -> "ReflectorConfig":
        seen = set()
        for source in self.sources:
            for key in filter(None, (source.name, source.abbrev)):
                if key.lower() in seen:
                    raise ValueError(f"duplicate source name or abbrev: {key}")
                seen.add(key.lower())
        return self

    def find_source(self, key: str) -> SourceConfig:
        """Source whose name or abbrev matches ``key``.

        Raises:
            SourceNotFound: If nothing matches
        """
        for source in self.sources:
            if source.matches(key):
                return source
        raise SourceNotFound(f"no source named {key!r}")

    def select(self, keys: Optional[Iterable[str]] = None) -> list[SourceConfig]:
        """Sources named by ``keys``, in that order; all sources if none given."""
        keys = list(keys or [])
        if not keys:
            return list(self.sources)
        return [self.find_source(key) for key in keys]


def default_config() -> ReflectorConfig:
    """Built-in sources: SDO daily movies and GOES ABI true color imagery."""
    return ReflectorConfig(sources=[
        SourceConfig(
            name="Solar Data Observatory",
            abbrev="sdo",
            remote="https://sdo.gsfc.nasa.gov/assets/img/dailymov",
            local="~/tmp/sat/sdo",
            codec="SDO",
            suffix="_1024_0193.mp4",
            period=86400,
            flatten=True,
        ),
        SourceConfig(
            name="GOES ABI_TrueColor",
            abbrev="goesabi",
            remote="ftp://ftp.nnvl.noaa.gov/GOES/ABI_TrueColor",
            local="~/tmp/sat/abi_truecolor",
            codec="GOES",
            prefix="ABI_TrueColor_",
            period=600,
        ),
    ])


def validate_config(config_dict: dict) -> tuple[Optional[ReflectorConfig], Optional[str]]:
    """
    Validate configuration dictionary and return ReflectorConfig or error message.

    Args:
        config_dict: Dictionary containing configuration values

    Returns:
        Tuple of (ReflectorConfig, None) on success,
        or (None, error_message) on validation failure
    """
    try:
        config = ReflectorConfig(**config_dict)
        return (config, None)
    except ValidationError as e:
        # Extract user-friendly error messages
        errors = []
        for error in e.errors():
            field = '.'.join(str(loc) for loc in error['loc'])
            msg = error['msg']
            errors.append(f"{field}: {msg}" if field else msg)
        error_message = '; '.join(errors)
        return (None, error_message)


def load_config(path: str) -> ReflectorConfig:
    """
    Read and validate a YAML configuration file.

    Raises:
        ConfigError: File unreadable, not YAML, or invalid
    """
    path = os.path.expanduser(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"cannot parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping with a 'sources' list")
    config, error = validate_config(data)
    if error:
        raise ConfigError(f"{path}: {error}")
    log.debug(f"loaded {len(config.sources)} sources from {path}")
    return config


# Re-export ValidationError for external use
__all__ = [
    'ConfigError',
    'SourceNotFound',
    'SourceConfig',
    'ReflectorConfig',
    'default_config',
    'validate_config',
    'load_config',
    'ValidationError',
]
