"""Failure models returned by file level operations."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class FileFailure(BaseModel):
    """Base file failure."""

    model_config = ConfigDict(extra="forbid")

    path: Path
    message: str


class FileNotFound(FileFailure):
    """Configuration file does not exist."""


class FileExists(FileFailure):
    """Target file already exists and overwriting was not requested."""


class FileNotWritable(FileFailure):
    """Target file exists but cannot be written."""


class FileIOFailure(FileFailure):
    """Operating system error while reading or writing."""


class UnsupportedFormat(FileFailure):
    """No codec handles the file extension."""

    extension: str


class CodecUnavailable(FileFailure):
    """A codec exists for the extension but its library is not installed."""

    extension: str
    dependency: str


class DecodeFailure(FileFailure):
    """File contents could not be decoded into a configuration tree."""

    line: int | None = None
    column: int | None = None


class EncodeFailure(FileFailure):
    """Configuration tree could not be encoded."""
