"""Composite key resolution."""

from __future__ import annotations

from collections.abc import Sequence

from treeconf.constants import DEFAULT_KEY_DELIMITER

__all__ = ["KeyPath"]


class KeyPath:
    """Translate caller supplied keys into tree segments and validator keys.

    Keys can be given as one delimited string (``"db.host"``) or as separate
    segments (``"db", "host"``). Both spellings resolve to the same segments
    and the same canonical key.
    """

    def __init__(self, delimiter: str = DEFAULT_KEY_DELIMITER) -> None:
        if not delimiter:
            raise ValueError("Key delimiter must be a non-empty string.")
        self.delimiter = delimiter

    def resolve(self, keys: Sequence[object]) -> list[str]:
        if not keys:
            raise ValueError("At least one key is required.")

        first_key = str(keys[0])
        if self.delimiter in first_key:
            return first_key.split(self.delimiter)
        return [str(key) for key in keys]

    def canonicalize(self, keys: Sequence[object]) -> str:
        if not keys:
            raise ValueError("At least one key is required.")

        first_key = str(keys[0])
        if self.delimiter in first_key:
            return first_key
        return self.delimiter.join(str(key) for key in keys)

    def __repr__(self) -> str:
        return f"KeyPath(delimiter={self.delimiter!r})"
