"""Common models and helpers used across treeconf modules."""

from .logging import LoggingConfig, create_logger, disable_library_logging, enable_library_logging, setup_cli_logging
from .models import AppInfo, AppPaths
from .paths import get_data_directory, resolve_working_directory

__all__ = [
    "AppInfo",
    "AppPaths",
    "LoggingConfig",
    "create_logger",
    "disable_library_logging",
    "enable_library_logging",
    "get_data_directory",
    "resolve_working_directory",
    "setup_cli_logging",
]
