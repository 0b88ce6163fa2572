"""Pure predicates describing the shape of raw payload values.

None of these coerce: ``"123"`` is a string, not an integer. Turning text
into numbers is the job of the rules in :mod:`spec_sanitizer.rules`.
"""

from __future__ import annotations

import collections.abc as cabc
import math
import re
import typing as t

from .keypath import KeyLike, has_key

# Russian mobile numbers: a country code (8, 7 or +7) is required, followed
# by a three digit operator code and seven digits with optional separators.
PHONE_PATTERN: t.Final[re.Pattern[str]] = re.compile(
    r"((8|7|\+7)[\- ]?)(\(?\d{3}\)?[\- ]?)[\d\- ]{7,10}", re.ASCII
)


def _is_real(value: object) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def is_string(value: object) -> bool:
    """Return ``True`` if *value* is a ``str``."""
    return isinstance(value, str)


def is_integer(value: object) -> bool:
    """Return ``True`` for finite numbers without a fractional part."""
    return _is_real(value) and t.cast("float", value) % 1 == 0


def is_float(value: object) -> bool:
    """Return ``True`` for finite numbers with a fractional part."""
    return _is_real(value) and t.cast("float", value) % 1 != 0


def is_phone(value: object) -> bool:
    """Return ``True`` if *value* looks like a Russian mobile number."""
    return isinstance(value, str) and PHONE_PATTERN.fullmatch(value) is not None


def is_array(value: object) -> bool:
    """Return ``True`` for lists and tuples."""
    return isinstance(value, list | tuple)


def is_typed_array(value: object, predicate: t.Callable[[t.Any], bool]) -> bool:
    """Return ``True`` if *value* is an array whose items all satisfy *predicate*."""
    return is_array(value) and all(
        predicate(item) for item in t.cast("cabc.Sequence[t.Any]", value)
    )


def is_key_exist(obj: t.Any, key: KeyLike) -> bool:
    """Return ``True`` if the dotted *key* resolves inside *obj*."""
    return has_key(obj, key)


def is_keys_exist(obj: t.Any, keys: cabc.Iterable[KeyLike]) -> bool:
    """Return ``True`` if every key in *keys* resolves inside *obj*."""
    return all(has_key(obj, key) for key in keys)


__all__ = [
    "PHONE_PATTERN",
    "is_array",
    "is_float",
    "is_integer",
    "is_key_exist",
    "is_keys_exist",
    "is_phone",
    "is_string",
    "is_typed_array",
]
