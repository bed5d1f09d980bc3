"""In-memory configuration store addressed by composite keys."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from pathlib import Path

from result import is_err

from treeconf.common import create_logger
from treeconf.constants import (
    DEFAULT_EXTNAME,
    DEFAULT_FILENAME,
    DEFAULT_KEY_DELIMITER,
    SUPPORTED_EXTENSIONS,
)

from .errors import ReadError, UnsupportedExtError, WriteError
from .file.codecs import CodecRegistry
from .file.locations import LocationPaths, PathArg
from .file.store import FileStore
from .keys import KeyPath
from .models import ConfigOptions
from .tree import (
    Tree,
    deep_delete,
    deep_fetch,
    deep_find,
    deep_merge,
    deep_set,
    materialize,
    normalize_keys,
)
from .validators import Validator, ValidatorRegistry
from .values import MISSING, Deferred, Missing, resolve_value

logger = create_logger("config")

type KeysArg = str | Sequence[object]

_UNSET = Missing()


class Config:
    """Hierarchical configuration with validation, lazy values and file persistence.

    Keys may be passed as one delimited string or as separate segments::

        config.set("db.host", value="localhost")
        config.fetch("db", "host")  # "localhost"
    """

    def __init__(
        self,
        settings: Mapping[object, object] | None = None,
        *,
        filename: str = DEFAULT_FILENAME,
        extname: str = DEFAULT_EXTNAME,
        key_delimiter: str = DEFAULT_KEY_DELIMITER,
        location_paths: Iterable[PathArg] = (),
        codecs: CodecRegistry | None = None,
    ) -> None:
        self._settings: Tree = normalize_keys(settings or {})
        self._keys = KeyPath(key_delimiter)
        self._validators = ValidatorRegistry()
        self._locations = LocationPaths(location_paths)
        self._files = FileStore(codecs)
        self.filename = filename
        self.extname = extname

    @classmethod
    def from_options(cls, options: ConfigOptions, settings: Mapping[object, object] | None = None) -> Config:
        return cls(
            settings,
            filename=options.filename,
            extname=options.extname,
            key_delimiter=options.key_delimiter,
            location_paths=options.location_paths,
        )

    @property
    def extname(self) -> str:
        return self._extname

    @extname.setter
    def extname(self, name: str) -> None:
        if name not in SUPPORTED_EXTENSIONS:
            raise UnsupportedExtError(f"Config file format `{name}` is not supported.")
        self._extname = name

    @property
    def key_delimiter(self) -> str:
        return self._keys.delimiter

    @property
    def location_paths(self) -> tuple[Path, ...]:
        return tuple(self._locations)

    @property
    def validators(self) -> ValidatorRegistry:
        return self._validators

    def append_path(self, path: PathArg) -> None:
        self._locations.append(path)

    def prepend_path(self, path: PathArg) -> None:
        self._locations.prepend(path)

    # Key operations

    def set(self, *keys: object, value: object = _UNSET, factory: Callable[[], object] | None = None) -> object:
        """Store ``value`` (or a lazily computed ``factory``) under a composite key.

        Exactly one of ``value`` and ``factory`` must be given. Values under a
        key with registered validators are checked immediately; deferred values
        are checked each time they are fetched.
        """
        if value is _UNSET and factory is None:
            raise TypeError("Need to set either value or factory.")
        if value is not _UNSET and factory is not None:
            raise TypeError("Can't set both value and factory.")

        segments = self._keys.resolve(keys)
        key = self._keys.canonicalize(keys)
        stored = Deferred(factory) if factory is not None else value

        if key in self._validators:
            if isinstance(stored, Deferred):
                stored = self._validators.defer(key, stored)
            else:
                self._validators.assert_valid(key, stored)

        parent = deep_set(self._settings, segments[:-1])
        parent[segments[-1]] = stored
        return stored

    def set_if_empty(
        self, *keys: object, value: object = _UNSET, factory: Callable[[], object] | None = None
    ) -> object | None:
        """Set a value only when its last key segment holds no value anywhere in the tree.

        A segment stored with ``None`` counts as empty.
        """
        segments = self._keys.resolve(keys)
        found = deep_find(self._settings, segments[-1])
        if found is not MISSING and found is not None:
            return None
        return self.set(*keys, value=value, factory=factory)

    def fetch(self, *keys: object, default: object = None, factory: Callable[[], object] | None = None) -> object:
        """Return the value under a composite key, resolving deferred values.

        ``factory`` (preferred) or ``default`` is used when the key is absent or
        holds ``None``.
        """
        segments = self._keys.resolve(keys)
        value = deep_fetch(self._settings, segments)
        if value is MISSING or value is None:
            value = Deferred(factory) if factory is not None else default
        return resolve_value(value)

    def merge(self, other: Mapping[object, object]) -> Tree:
        self._settings = deep_merge(self._settings, normalize_keys(other))
        return self._settings

    def append(self, *values: object, to: KeysArg) -> object:
        keys = _as_keys(to)
        return self.set(*keys, value=_as_list(self.fetch(*keys)) + list(values))

    def remove(self, *values: object, from_: KeysArg) -> object:
        keys = _as_keys(from_)
        return self.set(*keys, value=[item for item in _as_list(self.fetch(*keys)) if item not in values])

    def delete(self, *keys: object, default: object = None) -> object:
        """Delete a nested key and return the removed value, or ``default`` when absent.

        Pass ``default=MISSING`` to tell an absent key from one that held ``None``.
        """
        removed = deep_delete(self._settings, self._keys.resolve(keys))
        return default if removed is MISSING else removed

    def validate(self, *keys: object, validator: Validator) -> None:
        """Register ``validator`` for a composite key."""
        self._validators.register(self._keys.canonicalize(keys), validator)

    # File operations

    def find_file(self) -> Path | None:
        path = self._locations.find_file(self.filename, SUPPORTED_EXTENSIONS)
        logger.debug(
            "Config file lookup",
            filename=self.filename,
            locations=[str(location) for location in self._locations],
            found=str(path) if path else None,
        )
        return path

    source_file = find_file

    @property
    def persisted(self) -> bool:
        return self.find_file() is not None

    def read(self, file: PathArg | None = None) -> Tree:
        """Read a configuration file and merge it into the current settings.

        Raises:
            ReadError: no file could be located, it does not exist, or it cannot
                be decoded.
        """
        path = Path(file) if file is not None else self.find_file()
        if path is None:
            raise ReadError("No file found to read configuration from!")

        result = self._files.load(path)
        if is_err(result):
            failure = result.err_value
            logger.error("Config read failed", path=str(path), error=failure.message)
            raise ReadError(failure.message)

        self._adopt_file_name(path)
        return self.merge(result.ok_value)

    def write(self, file: PathArg | None = None, *, force: bool = False) -> Path:
        """Write the current settings to a file and return its path.

        Without an explicit ``file`` the located configuration file is used, or
        ``<first location or cwd>/<filename><extname>`` when none exists yet.

        Raises:
            WriteError: the file exists and ``force`` is false, it is not
                writable, or its format cannot be encoded.
        """
        path = Path(file) if file is not None else self.find_file()
        if path is None:
            path = self._locations.default_directory() / f"{self.filename}{self.extname}"

        result = self._files.dump(path, self.to_dict(), force=force)
        if is_err(result):
            failure = result.err_value
            logger.error("Config write failed", path=str(path), error=failure.message)
            raise WriteError(failure.message)

        logger.debug("Config written", path=str(path))
        self._adopt_file_name(path)
        return result.ok_value

    def to_dict(self) -> Tree:
        """Return a copy of the settings with deferred values resolved."""
        return materialize(self._settings)

    def _adopt_file_name(self, path: Path) -> None:
        self.extname = path.suffix
        self.filename = path.name.removesuffix(path.suffix)

    def __repr__(self) -> str:
        return (
            f"Config(filename={self.filename!r}, extname={self.extname!r}, "
            f"key_delimiter={self.key_delimiter!r}, location_paths={[str(p) for p in self._locations]!r})"
        )


def _as_keys(keys: KeysArg) -> list[object]:
    if isinstance(keys, str):
        return [keys]
    return list(keys)


def _as_list(value: object) -> list[object]:
    if value is None:
        return []
    if isinstance(value, list | tuple):
        return list(value)
    return [value]
