"""Failures raised while reading tasktrail settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A ``TASKTRAIL_*`` or database setting holds a value tasktrail cannot use."""


class MissingConfigurationError(ConfigurationError):
    """One or more required environment variables are unset or blank."""
