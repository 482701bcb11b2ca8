"""Defaults for fuzzy entity resolution."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_int_env_var
from .errors import ConfigurationError

DEFAULT_RESOLUTION_LIMIT = 10
MAX_RESOLUTION_LIMIT = 20
DEFAULT_SCAN_POOL_SIZE = 200


@dataclass(frozen=True, slots=True)
class ResolutionConfig:
    default_limit: int = DEFAULT_RESOLUTION_LIMIT
    max_limit: int = MAX_RESOLUTION_LIMIT
    # upper bound on rows scored when neither label filter matched anything
    scan_pool_size: int = DEFAULT_SCAN_POOL_SIZE


def get_resolution_config() -> ResolutionConfig:
    scan_pool_size = optional_int_env_var(
        "TASKTRAIL_SCAN_POOL_SIZE",
        default=DEFAULT_SCAN_POOL_SIZE,
    )
    if scan_pool_size < 1:
        raise ConfigurationError("TASKTRAIL_SCAN_POOL_SIZE must be positive")
    return ResolutionConfig(scan_pool_size=scan_pool_size)
