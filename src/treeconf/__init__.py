"""treeconf - hierarchical configuration with composite keys and file persistence.

By default, treeconf's internal logging is disabled when used as a library.
Library users can enable logging by calling treeconf.enable_logging().
"""

from treeconf.common import disable_library_logging, enable_library_logging
from treeconf.config import (
    Config,
    ConfigError,
    ConfigOptions,
    Deferred,
    ReadError,
    TypeConflictError,
    UnsupportedExtError,
    ValidationError,
    WriteError,
)

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "Config",
    "ConfigError",
    "ConfigOptions",
    "Deferred",
    "ReadError",
    "TypeConflictError",
    "UnsupportedExtError",
    "ValidationError",
    "WriteError",
    "enable_logging",
]
