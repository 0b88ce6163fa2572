"""Dotted key-path helpers for nested mappings.

Paths are handled internally as tuples of segments so that walking a
mapping never depends on string splitting. The dotted string form
(``"foo.bar.baz"``) is only the external representation used in error
reports and by callers passing keys by hand.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as t

KeyPath: t.TypeAlias = tuple[str, ...]
KeyLike: t.TypeAlias = str | cabc.Sequence[str]

SEPARATOR: t.Final[str] = "."


def split_key(key: KeyLike) -> KeyPath:
    """Return *key* as a tuple of path segments.

    Strings are split on ``"."`` with empty segments dropped; any other
    sequence is taken as already split.
    """
    if isinstance(key, str):
        return tuple(part for part in key.split(SEPARATOR) if part)
    return tuple(str(part) for part in key)


def join_key(path: cabc.Iterable[object]) -> str:
    """Return the dotted representation of *path*."""
    return SEPARATOR.join(str(part) for part in path)


def iter_leaves(
    obj: cabc.Mapping[str, t.Any], prefix: KeyPath = ()
) -> cabc.Iterator[tuple[KeyPath, t.Any]]:
    """Yield ``(path, value)`` for every leaf below *obj*.

    Only mappings are descended into. Sequences, ``None`` and scalars are
    leaves; an empty mapping contributes no leaves at all.
    """
    for key, value in obj.items():
        path = (*prefix, str(key))
        if isinstance(value, cabc.Mapping):
            yield from iter_leaves(value, path)
        else:
            yield path, value


def flatten_paths(obj: cabc.Mapping[str, t.Any]) -> dict[KeyPath, t.Any]:
    """Return a ``{path tuple: leaf}`` view of *obj*."""
    return dict(iter_leaves(obj))


def flatten(obj: cabc.Mapping[str, t.Any]) -> dict[str, t.Any]:
    """Return a ``{dotted key: leaf}`` view of *obj*."""
    return {join_key(path): value for path, value in iter_leaves(obj)}


def _walk(obj: t.Any, path: KeyPath) -> tuple[bool, t.Any]:
    current = obj
    for segment in path:
        if not isinstance(current, cabc.Mapping) or segment not in current:
            return False, None
        current = current[segment]
    return True, current


def has_key(obj: t.Any, key: KeyLike) -> bool:
    """Return ``True`` when every segment of *key* is present in *obj*.

    Presence is what matters: a segment holding ``0``, ``False``, ``""`` or
    ``None`` exists.
    """
    found, _ = _walk(obj, split_key(key))
    return found


def get_value(obj: t.Any, key: KeyLike, default: t.Any = None) -> t.Any:
    """Return the value at *key* in *obj*, or *default* when absent."""
    found, value = _walk(obj, split_key(key))
    return value if found else default


def set_value(obj: cabc.MutableMapping[str, t.Any], key: KeyLike, value: t.Any) -> None:
    """Store *value* at *key*, creating intermediate dictionaries as needed."""
    path = split_key(key)
    if not path:
        msg = "cannot set a value at an empty key path"
        raise ValueError(msg)
    current = obj
    for depth, segment in enumerate(path[:-1]):
        child = current.get(segment)
        if child is None:
            child = current[segment] = {}
        elif not isinstance(child, cabc.MutableMapping):
            msg = f"cannot descend into non-mapping at {join_key(path[: depth + 1])!r}"
            raise TypeError(msg)
        current = child
    current[path[-1]] = value


__all__ = [
    "SEPARATOR",
    "KeyLike",
    "KeyPath",
    "flatten",
    "flatten_paths",
    "get_value",
    "has_key",
    "iter_leaves",
    "join_key",
    "set_value",
    "split_key",
]
