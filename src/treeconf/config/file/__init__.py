"""File discovery, codecs and persistence for configuration trees."""

from .codecs import Codec, CodecDecodeError, CodecRegistry, JsonCodec, TomlCodec, YamlCodec, default_codecs
from .locations import LocationPaths
from .models import (
    CodecUnavailable,
    DecodeFailure,
    EncodeFailure,
    FileExists,
    FileFailure,
    FileIOFailure,
    FileNotFound,
    FileNotWritable,
    UnsupportedFormat,
)
from .store import FileStore

__all__ = [
    "Codec",
    "CodecDecodeError",
    "CodecRegistry",
    "CodecUnavailable",
    "DecodeFailure",
    "EncodeFailure",
    "FileExists",
    "FileFailure",
    "FileIOFailure",
    "FileNotFound",
    "FileNotWritable",
    "FileStore",
    "JsonCodec",
    "LocationPaths",
    "TomlCodec",
    "UnsupportedFormat",
    "YamlCodec",
    "default_codecs",
]
