"""
Validation module for reflector.

Provides source configuration validation and runtime settings.
"""

from validation.config import (
    ConfigError,
    SourceNotFound,
    SourceConfig,
    ReflectorConfig,
    default_config,
    validate_config,
    load_config,
)
from validation.settings import RuntimeSettings, get_settings

__all__ = [
    'ConfigError',
    'SourceNotFound',
    'SourceConfig',
    'ReflectorConfig',
    'default_config',
    'validate_config',
    'load_config',
    'RuntimeSettings',
    'get_settings',
]
