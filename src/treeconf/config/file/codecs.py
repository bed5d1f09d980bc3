"""Serialization codecs and the registry that dispatches on file extension."""

from __future__ import annotations

import importlib.util
import json
import tomllib
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, ClassVar, Protocol

import yaml
from result import Err, Ok, Result

from treeconf.common import create_logger

from .models import CodecUnavailable, FileFailure, UnsupportedFormat

logger = create_logger("codecs")

__all__ = [
    "Codec",
    "CodecDecodeError",
    "CodecRegistry",
    "JsonCodec",
    "TomlCodec",
    "YamlCodec",
    "default_codecs",
]


class CodecDecodeError(ValueError):
    """Raised by codecs when input bytes cannot be decoded."""

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


class Codec(Protocol):
    """Translate between raw bytes and a configuration tree.

    ``decode_requires`` and ``encode_requires`` name the modules each direction
    imports, so a codec can stay readable when only its writer is missing.
    """

    name: ClassVar[str]
    extensions: ClassVar[tuple[str, ...]]
    decode_requires: ClassVar[tuple[str, ...]]
    encode_requires: ClassVar[tuple[str, ...]]

    def decode(self, data: bytes) -> Any: ...

    def encode(self, tree: Mapping[str, object]) -> bytes: ...


class YamlCodec:
    name = "yaml"
    extensions = (".yaml", ".yml")
    decode_requires = ("yaml",)
    encode_requires = ("yaml",)

    def decode(self, data: bytes) -> Any:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as exc:
            mark = getattr(exc, "problem_mark", None)
            line = getattr(mark, "line", None)
            column = getattr(mark, "column", None)
            raise CodecDecodeError(
                str(exc),
                line=(line + 1) if line is not None else None,
                column=(column + 1) if column is not None else None,
            ) from exc

    def encode(self, tree: Mapping[str, object]) -> bytes:
        try:
            text = yaml.safe_dump(dict(tree), sort_keys=False, allow_unicode=True)
        except yaml.YAMLError as exc:
            raise ValueError(str(exc)) from exc
        return text.encode("utf-8")


class JsonCodec:
    name = "json"
    extensions = (".json",)
    decode_requires = ()
    encode_requires = ()

    def decode(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except json.JSONDecodeError as exc:
            raise CodecDecodeError(exc.msg, line=exc.lineno, column=exc.colno) from exc
        except UnicodeDecodeError as exc:
            raise CodecDecodeError(str(exc)) from exc

    def encode(self, tree: Mapping[str, object]) -> bytes:
        return (json.dumps(tree, indent=2) + "\n").encode("utf-8")


class TomlCodec:
    name = "toml"
    extensions = (".toml",)
    decode_requires = ()
    encode_requires = ("tomli_w",)

    def decode(self, data: bytes) -> Any:
        try:
            return tomllib.loads(data.decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise CodecDecodeError(str(exc)) from exc

    def encode(self, tree: Mapping[str, object]) -> bytes:
        # The registry refuses to hand this codec out for writing without tomli_w.
        import tomli_w

        return tomli_w.dumps(dict(tree)).encode("utf-8")


class CodecRegistry:
    """Map file extensions to codecs.

    Library requirements are checked once, when a codec is registered, and
    separately for reading and writing. A direction whose codec cannot run is
    remembered together with the missing module so lookups report it instead of
    failing on import.
    """

    def __init__(self, codecs: Iterable[Codec] = ()) -> None:
        self._codecs: dict[str, Codec] = {}
        self._missing_decode: dict[str, str] = {}
        self._missing_encode: dict[str, str] = {}
        for codec in codecs:
            self.register(codec)

    def register(self, codec: Codec) -> None:
        missing_decode = _first_missing(codec.decode_requires)
        missing_encode = _first_missing(codec.encode_requires)
        for extension in codec.extensions:
            self._codecs[extension] = codec
            _remember(self._missing_decode, extension, missing_decode)
            _remember(self._missing_encode, extension, missing_encode)

        if missing_decode is not None or missing_encode is not None:
            logger.debug(
                "Codec partially unavailable",
                codec=codec.name,
                decode_dependency=missing_decode,
                encode_dependency=missing_encode,
            )

    def lookup(self, path: Path, *, for_write: bool = False) -> Result[Codec, FileFailure]:
        """Return the codec for ``path``, usable in the requested direction."""
        extension = path.suffix
        codec = self._codecs.get(extension)
        if codec is None:
            return Err(
                UnsupportedFormat(
                    path=path,
                    extension=extension,
                    message=f"Config file format `{extension}` is not supported.",
                )
            )

        missing = self._missing_encode if for_write else self._missing_decode
        dependency = missing.get(extension)
        if dependency is not None:
            return Err(
                CodecUnavailable(
                    path=path,
                    extension=extension,
                    dependency=dependency,
                    message=(
                        f"Library `{dependency}` is missing. "
                        f"Please install it to use the {extension} configuration format."
                    ),
                )
            )

        return Ok(codec)

    @property
    def extensions(self) -> tuple[str, ...]:
        return tuple(self._codecs)

    def __contains__(self, extension: object) -> bool:
        return extension in self._codecs


def default_codecs() -> CodecRegistry:
    return CodecRegistry([YamlCodec(), JsonCodec(), TomlCodec()])


def _first_missing(modules: Iterable[str]) -> str | None:
    return next((module for module in modules if importlib.util.find_spec(module) is None), None)


def _remember(missing: dict[str, str], extension: str, dependency: str | None) -> None:
    if dependency is None:
        missing.pop(extension, None)
    else:
        missing[extension] = dependency
