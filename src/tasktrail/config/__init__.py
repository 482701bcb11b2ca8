"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_int_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .resolution import (
    DEFAULT_RESOLUTION_LIMIT,
    MAX_RESOLUTION_LIMIT,
    ResolutionConfig,
    get_resolution_config,
)
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_RESOLUTION_LIMIT",
    "MAX_RESOLUTION_LIMIT",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "ResolutionConfig",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_resolution_config",
    "get_storage_config",
    "optional_int_env_var",
    "require_env_var",
    "require_env_vars",
]
