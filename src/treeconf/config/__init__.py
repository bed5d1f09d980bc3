"""Public configuration API for treeconf."""

from __future__ import annotations

from .errors import (
    ConfigError,
    ReadError,
    TypeConflictError,
    UnsupportedExtError,
    ValidationError,
    WriteError,
)
from .file import CodecRegistry, LocationPaths, default_codecs
from .keys import KeyPath
from .models import ConfigOptions
from .store import Config
from .validators import Validator, ValidatorRegistry
from .values import MISSING, Deferred

__all__ = [
    "MISSING",
    "CodecRegistry",
    "Config",
    "ConfigError",
    "ConfigOptions",
    "Deferred",
    "KeyPath",
    "LocationPaths",
    "ReadError",
    "TypeConflictError",
    "UnsupportedExtError",
    "ValidationError",
    "Validator",
    "ValidatorRegistry",
    "WriteError",
    "default_codecs",
]
