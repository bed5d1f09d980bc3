"""Operations over nested configuration mappings.

Trees are plain ``dict`` objects with ``str`` keys. Values are scalars, lists,
nested dicts or :class:`~treeconf.config.values.Deferred` producers. None of
these helpers know how keys are spelled by callers; they work on already
resolved segment lists.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .errors import TypeConflictError
from .values import MISSING, Deferred, resolve_value

type Tree = dict[str, object]

__all__ = [
    "Tree",
    "deep_delete",
    "deep_fetch",
    "deep_find",
    "deep_merge",
    "deep_set",
    "materialize",
    "normalize_keys",
]


def deep_set(tree: Tree, segments: Sequence[str]) -> Tree:
    """Return the mapping found by walking ``segments``, creating missing levels.

    ``segments`` is the parent path of the value being assigned; the caller
    stores the leaf in the returned mapping.
    """
    node = tree
    for depth, segment in enumerate(segments):
        child = node.get(segment)
        if child is None:
            child = {}
            node[segment] = child
        elif not isinstance(child, dict):
            path = list(segments[: depth + 1])
            raise TypeConflictError(
                f"Cannot set a nested key below {path}: it holds a {type(child).__name__}, not a mapping."
            )
        node = child
    return node


def deep_fetch(tree: Mapping[str, object], segments: Sequence[str]) -> object:
    """Return the value stored under ``segments`` or ``MISSING``."""
    value: object = tree
    for segment in segments:
        if not isinstance(value, Mapping) or segment not in value:
            return MISSING
        value = value[segment]
    return value


def deep_merge(base: Mapping[str, object], override: Mapping[str, object]) -> Tree:
    """Recursively merge two mappings, giving precedence to override."""
    result: Tree = dict(base)

    for key, override_value in override.items():
        existing_value = result.get(key)

        if isinstance(existing_value, Mapping) and isinstance(override_value, Mapping):
            result[key] = deep_merge(existing_value, override_value)
        else:
            result[key] = override_value

    return result


def deep_delete(tree: Tree, segments: Sequence[str]) -> object:
    """Delete the value under ``segments`` and return it, or ``MISSING``.

    Recursion stops at the first value that is not a mapping; that key is
    removed even if more segments remain.
    """
    key, *rest = segments
    if key not in tree:
        return MISSING

    value = tree[key]
    if rest and isinstance(value, dict):
        return deep_delete(value, rest)
    return tree.pop(key)


def deep_find(tree: object, key: str) -> object:
    """Search ``tree`` depth first for any mapping holding ``key``.

    Lists are scanned element by element. When several mappings hold the key
    the last one visited wins.
    """
    if isinstance(tree, Mapping):
        if key in tree:
            return tree[key]
        children = tree.values()
    elif isinstance(tree, list | tuple):
        children = tree
    else:
        return MISSING

    found: object = MISSING
    for child in children:
        match = deep_find(child, key)
        if match is not MISSING:
            found = match
    return found


def normalize_keys(data: Mapping[object, object]) -> Tree:
    """Return a copy of ``data`` with every mapping key converted to ``str``."""
    return {str(key): _normalize_value(value) for key, value in data.items()}


def _normalize_value(value: object) -> object:
    if isinstance(value, Mapping):
        return normalize_keys(value)
    if isinstance(value, list):
        return [_normalize_value(item) for item in value]
    return value


def materialize(tree: Mapping[str, object]) -> Tree:
    """Return a deep copy of ``tree`` with deferred values resolved."""
    return {key: _materialize_value(value) for key, value in tree.items()}


def _materialize_value(value: object) -> object:
    if isinstance(value, Deferred):
        value = resolve_value(value)
    if isinstance(value, Mapping):
        return materialize(value)
    if isinstance(value, list | tuple):
        return [_materialize_value(item) for item in value]
    return value
