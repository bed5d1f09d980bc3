"""Path helpers for treeconf."""

from __future__ import annotations

import os
from pathlib import Path

from .models import AppPaths


def resolve_working_directory(working_dir: Path | None) -> Path:
    base = working_dir or Path.cwd()
    if base.is_file():
        base = base.parent
    try:
        return base.resolve(strict=False)
    except OSError:
        return base


def get_data_directory(paths: AppPaths) -> Path:
    """Get XDG data directory for the application.

    Returns ~/.local/share/{data_dir_name} (or XDG_DATA_HOME/{data_dir_name} if set).
    """
    xdg_data = os.getenv("XDG_DATA_HOME")
    base_dir = Path(xdg_data).expanduser() if xdg_data else Path.home() / ".local" / "share"
    return base_dir / paths.data_dir_name
