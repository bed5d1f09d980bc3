"""Read and write configuration trees through the codec registry."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from result import Err, Ok, Result, is_err

from treeconf.common import create_logger

from ..tree import Tree, normalize_keys
from .codecs import CodecDecodeError, CodecRegistry, default_codecs
from .models import (
    DecodeFailure,
    EncodeFailure,
    FileExists,
    FileFailure,
    FileIOFailure,
    FileNotFound,
    FileNotWritable,
)

logger = create_logger("files")


class FileStore:
    """Decode files into trees and persist trees into files.

    Nothing touches the filesystem after a failure: a tree is returned only
    once decoding fully succeeded, and bytes are written only after encoding
    succeeded.
    """

    def __init__(self, codecs: CodecRegistry | None = None) -> None:
        self.codecs = codecs if codecs is not None else default_codecs()

    def load(self, path: Path) -> Result[Tree, FileFailure]:
        logger.debug("Loading config file", path=str(path))

        if not path.is_file():
            return Err(
                FileNotFound(
                    path=path,
                    message=f"Configuration file `{path}` does not exist!",
                )
            )

        codec_result = self.codecs.lookup(path)
        if is_err(codec_result):
            return codec_result
        codec = codec_result.ok_value

        try:
            raw = path.read_bytes()
        except OSError as exc:
            return Err(FileIOFailure(path=path, message=str(exc)))

        try:
            data = codec.decode(raw)
        except CodecDecodeError as exc:
            return Err(
                DecodeFailure(
                    path=path,
                    line=exc.line,
                    column=exc.column,
                    message=f"Failed to parse `{path}`: {exc}",
                )
            )

        if data is None:
            data = {}

        if not isinstance(data, Mapping):
            return Err(
                DecodeFailure(
                    path=path,
                    message="Configuration root must be a mapping of keys to values.",
                )
            )

        logger.debug("Config file decoded", path=str(path), codec=codec.name, keys=len(data))
        return Ok(normalize_keys(data))

    def dump(self, path: Path, tree: Mapping[str, object], *, force: bool = False) -> Result[Path, FileFailure]:
        logger.debug("Writing config file", path=str(path), force=force)

        if path.exists():
            if not force:
                return Err(
                    FileExists(
                        path=path,
                        message=f"File `{path}` already exists. Use force option to overwrite.",
                    )
                )
            if not os.access(path, os.W_OK):
                return Err(FileNotWritable(path=path, message=f"Cannot write to {path}."))

        codec_result = self.codecs.lookup(path, for_write=True)
        if is_err(codec_result):
            return codec_result
        codec = codec_result.ok_value

        try:
            payload = codec.encode(tree)
        except (TypeError, ValueError, OverflowError) as exc:
            return Err(
                EncodeFailure(
                    path=path,
                    message=f"Failed to encode configuration as {codec.name}: {exc}",
                )
            )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(payload)
        except OSError as exc:
            return Err(FileIOFailure(path=path, message=str(exc)))

        return Ok(path)
