"""Exceptions raised by the configuration store."""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for all configuration store errors."""


class ReadError(ConfigError):
    """Configuration could not be read from a file."""


class WriteError(ConfigError):
    """Configuration could not be written to a file."""


class UnsupportedExtError(ConfigError):
    """Extension outside of the supported configuration formats."""


class ValidationError(ConfigError):
    """A registered validator rejected a value."""


class TypeConflictError(ConfigError, TypeError):
    """A key path runs through a value that is not a mapping."""
