"""Runtime settings using pydantic-settings with env var support.

Env vars (REFLECTOR_ prefix) supply defaults; command-line flags override them.
Nothing is required: without a config file the built-in sources are used.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("trace", "debug", "info", "warning", "error")
LOG_FORMATS = ("text", "json")


class RuntimeSettings(BaseSettings):
    """reflector process settings.

    Precedence (highest to lowest):
    1. Command-line flags (applied by the CLI)
    2. REFLECTOR_-prefixed environment variables
    3. Defaults defined below
    """

    model_config = SettingsConfigDict(env_prefix="REFLECTOR_")

    # YAML file listing the sources; None = built-in defaults
    config: Optional[str] = None
    log_level: str = "info"
    log_format: str = "text"
    # Where run state is persisted; None = fall back to the config file's data_dir
    data_dir: Optional[str] = None

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str) and v.lower() in LOG_LEVELS:
            return v.lower()
        raise ValueError(f"log_level must be one of {LOG_LEVELS}, got: {v}")

    @field_validator("log_format", mode="before")
    @classmethod
    def validate_log_format(cls, v):
        if isinstance(v, str) and v.lower() in LOG_FORMATS:
            return v.lower()
        raise ValueError(f"log_format must be one of {LOG_FORMATS}, got: {v}")


@lru_cache(maxsize=1)
def get_settings() -> RuntimeSettings:
    """Return the cached RuntimeSettings instance.

    Raises:
        pydantic.ValidationError: If an environment variable holds an invalid value
    """
    return RuntimeSettings()
