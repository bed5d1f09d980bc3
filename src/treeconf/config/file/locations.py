"""Ordered directories searched for a configuration file."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from os import PathLike
from pathlib import Path

from treeconf.common import resolve_working_directory

type PathArg = str | PathLike[str]

__all__ = ["LocationPaths", "PathArg"]


class LocationPaths:
    """Directories in priority order; earlier entries win."""

    def __init__(self, paths: Iterable[PathArg] = ()) -> None:
        self._paths: list[Path] = [_as_directory(path) for path in paths]

    def append(self, path: PathArg) -> None:
        self._paths.append(_as_directory(path))

    def prepend(self, path: PathArg) -> None:
        self._paths.insert(0, _as_directory(path))

    @property
    def first(self) -> Path | None:
        return self._paths[0] if self._paths else None

    def default_directory(self) -> Path:
        """Directory used when writing a file that has not been located."""
        return self.first or resolve_working_directory(None)

    def find_file(self, filename: str, extensions: Sequence[str]) -> Path | None:
        """Return the first existing ``<dir>/<filename><ext>``.

        Every extension is tried in a directory before moving to the next one.
        """
        for directory in self._paths:
            for extension in extensions:
                candidate = directory / f"{filename}{extension}"
                if candidate.exists():
                    return candidate
        return None

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"LocationPaths({[str(path) for path in self._paths]!r})"


def _as_directory(path: PathArg) -> Path:
    return Path(path).expanduser()
