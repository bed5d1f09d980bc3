"""Construction options for a configuration store."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from treeconf.constants import (
    DEFAULT_EXTNAME,
    DEFAULT_FILENAME,
    DEFAULT_KEY_DELIMITER,
    SUPPORTED_EXTENSIONS,
)


class ConfigOptions(BaseModel):
    """Where a store looks for its file and how it splits keys."""

    model_config = ConfigDict(extra="forbid")

    filename: str = Field(default=DEFAULT_FILENAME, min_length=1)
    extname: str = DEFAULT_EXTNAME
    key_delimiter: str = Field(default=DEFAULT_KEY_DELIMITER, min_length=1)
    location_paths: list[Path] = Field(default_factory=list)

    @field_validator("extname")
    @classmethod
    def _validate_extname(cls, value: str) -> str:
        if value not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Config file format `{value}` is not supported.")
        return value
