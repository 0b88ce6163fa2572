"""Sanitization rules: validate one raw value and coerce it to a fixed type.

Rules never raise for bad data. They report the problem through the
``on_error`` callback and return a typed default instead, so a caller always
gets a value of the expected type back.
"""

from __future__ import annotations

import math
import re
import typing as t

from .errors import InvalidRuleError, SanitizerError
from .predicates import is_array, is_float, is_integer, is_phone, is_string

_DIGITS_RE: t.Final[re.Pattern[str]] = re.compile(r"[0-9]+")
_DECIMAL_RE: t.Final[re.Pattern[str]] = re.compile(r"[0-9]+\.[0-9]+")
_NON_DIGITS_RE: t.Final[re.Pattern[str]] = re.compile(r"[^0-9]+")


class ErrorCallback(t.Protocol):
    """Receives the error kind (and offending indexes for structural rules)."""

    def __call__(
        self, error: SanitizerError, indexes: list[int] | None = None, /
    ) -> None:
        """Record *error* for the value being sanitized."""
        ...


@t.runtime_checkable
class Rule(t.Protocol):
    """Anything exposing ``sanitize(value, on_error)``."""

    def sanitize(self, value: t.Any, on_error: ErrorCallback | None = None) -> t.Any:
        """Return the sanitized form of *value*."""
        ...


def _ignore_error(error: SanitizerError, indexes: list[int] | None = None, /) -> None:
    """Discard error reports when the caller did not ask for them."""


class ScalarRule:
    """Base for rules mapping one value to one value of a fixed type."""

    default: t.ClassVar[t.Any] = None

    def sanitize(self, value: t.Any, on_error: ErrorCallback | None = None) -> t.Any:
        """Return *value* coerced, or :attr:`default` after reporting.

        A :class:`ValueError` from :meth:`coerce` rejects the value the same
        way a failed :meth:`is_valid` does.
        """
        report = on_error or _ignore_error
        if not self.is_valid(value):
            report(SanitizerError.INVALID_VALUE)
            return self.default
        try:
            return self.coerce(value)
        except ValueError:
            report(SanitizerError.INVALID_VALUE)
            return self.default

    def is_valid(self, value: t.Any) -> bool:  # pragma: no cover - abstract
        """Return ``True`` if *value* can be coerced."""
        raise NotImplementedError

    def coerce(self, value: t.Any) -> t.Any:
        """Convert an already validated *value*."""
        return value

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"{type(self).__name__}()"


class IntegerRule(ScalarRule):
    """Accept integral numbers and strings of ASCII digits."""

    default = 0

    def is_valid(self, value: t.Any) -> bool:
        """Return ``True`` for integral numbers or digit strings."""
        if is_integer(value):
            return True
        return is_string(value) and _DIGITS_RE.fullmatch(value) is not None

    def coerce(self, value: t.Any) -> int:
        """Return *value* as an ``int``.

        Digit strings beyond the interpreter's conversion limit raise
        :class:`ValueError` and are reported as invalid.
        """
        return int(value)


class FloatRule(ScalarRule):
    """Accept non-integral numbers and ``digits.digits`` strings."""

    default = 0.0

    def is_valid(self, value: t.Any) -> bool:
        """Return ``True`` for fractional numbers or decimal strings."""
        if is_float(value):
            return True
        return is_string(value) and _DECIMAL_RE.fullmatch(value) is not None

    def coerce(self, value: t.Any) -> float:
        """Return *value* as a ``float``, rejecting overflow to infinity."""
        result = float(value)
        if not math.isfinite(result):
            msg = "decimal value does not fit in a finite float"
            raise ValueError(msg)
        return result


class StringRule(ScalarRule):
    """Accept strings unchanged."""

    default = ""

    def is_valid(self, value: t.Any) -> bool:
        """Return ``True`` for strings."""
        return is_string(value)


class PhoneRule(ScalarRule):
    """Accept Russian mobile numbers and normalise them to ``7XXXXXXXXXX``."""

    default = ""

    def is_valid(self, value: t.Any) -> bool:
        """Return ``True`` when *value* matches the mobile number grammar."""
        return is_phone(value)

    def coerce(self, value: str) -> str:
        """Rewrite a leading ``8`` to ``7`` and keep digits only."""
        if value.startswith("8"):
            value = "7" + value[1:]
        return _NON_DIGITS_RE.sub("", value)


class StructuralRule:
    """Base for rules that delegate to an inner rule per element."""

    def __init__(self, rule: Rule) -> None:
        if not isinstance(rule, Rule):
            msg = f"expected a rule exposing sanitize(), got {type(rule).__name__}"
            raise InvalidRuleError(msg)
        self.rule = rule

    def sanitize(
        self, value: t.Any, on_error: ErrorCallback | None = None
    ) -> t.Any:  # pragma: no cover - abstract
        """Return the sanitized form of *value*."""
        raise NotImplementedError

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"{type(self).__name__}(rule={self.rule!r})"


class TypedArrayRule(StructuralRule):
    """Sanitize every element of an array with the wrapped rule.

    The array is all-or-nothing: if any element fails, the whole array is
    dropped and the failing indexes are reported.
    """

    def sanitize(self, value: t.Any, on_error: ErrorCallback | None = None) -> list[t.Any]:
        """Return a new list of sanitized elements, or ``[]`` on any failure."""
        report = on_error or _ignore_error
        if not is_array(value):
            report(SanitizerError.INVALID_VALUE, [])
            return []

        invalid: list[int] = []
        result: list[t.Any] = []
        for index, item in enumerate(value):

            def mark(
                error: SanitizerError,
                indexes: list[int] | None = None,
                /,
                *,
                _index: int = index,
            ) -> None:
                if not invalid or invalid[-1] != _index:
                    invalid.append(_index)

            result.append(self.rule.sanitize(item, mark))

        if invalid:
            report(SanitizerError.INVALID_STRUCTURE_VALUE, invalid)
            return []
        return result


__all__ = [
    "ErrorCallback",
    "FloatRule",
    "IntegerRule",
    "PhoneRule",
    "Rule",
    "ScalarRule",
    "StringRule",
    "StructuralRule",
    "TypedArrayRule",
]
