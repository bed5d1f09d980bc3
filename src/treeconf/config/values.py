"""Deferred configuration values."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["MISSING", "Deferred", "Missing", "resolve_value"]


class Missing:
    """Marker for a key that is not present in a tree."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = Missing()


@dataclass(frozen=True, slots=True)
class Deferred:
    """A value computed on every fetch instead of being stored concretely.

    The producer takes no arguments. It may return another ``Deferred``, in
    which case resolution continues until a concrete value is reached.
    """

    producer: Callable[[], object]

    def __call__(self) -> object:
        return self.producer()


def resolve_value(value: object) -> object:
    """Invoke deferred producers until a concrete value is obtained."""
    while isinstance(value, Deferred):
        value = value()
    return value
