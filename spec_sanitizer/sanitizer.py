"""Spec-driven sanitization of nested payloads."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import logging
import types
import typing as t

from .errors import InvalidRuleError, InvalidSpecError, SanitizationError, SanitizerError
from .keypath import KeyPath, flatten_paths, get_value, has_key, iter_leaves, join_key, set_value
from .rules import FloatRule, IntegerRule, PhoneRule, Rule, StringRule, TypedArrayRule

logger = logging.getLogger(__name__)

ARRAY_SUFFIX: t.Final[str] = "[]"


@dc.dataclass(slots=True, frozen=True)
class SanitizeResult:
    """Outcome of one :meth:`Sanitizer.sanitize_by_spec` call."""

    payload: dict[str, t.Any]
    errors: dict[str, SanitizerError] = dc.field(default_factory=dict)
    invalid_indexes: dict[str, list[int]] = dc.field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Return ``True`` when no errors were recorded."""
        return not self.errors

    def raise_for_errors(self) -> dict[str, t.Any]:
        """Return the payload, or raise :class:`SanitizationError` if any error was recorded."""
        if self.errors:
            raise SanitizationError(self.errors)
        return self.payload

    def to_dict(self) -> dict[str, t.Any]:
        """Return a JSON-serializable mapping."""
        return {
            "payload": self.payload,
            "errors": {path: str(kind) for path, kind in self.errors.items()},
            "invalid_indexes": {
                path: list(indexes) for path, indexes in self.invalid_indexes.items()
            },
        }


class _Report:
    """Error accumulator scoped to a single sanitize call."""

    __slots__ = ("errors", "invalid_indexes")

    def __init__(self) -> None:
        self.errors: dict[str, SanitizerError] = {}
        self.invalid_indexes: dict[str, list[int]] = {}

    def record(
        self, key: str, error: SanitizerError, indexes: list[int] | None = None
    ) -> None:
        self.errors[key] = error
        if indexes:
            self.invalid_indexes[key] = list(indexes)
        logger.debug("Recorded %s at %r", error, key or "<root>")

    def result(self, payload: dict[str, t.Any]) -> SanitizeResult:
        return SanitizeResult(
            payload=payload,
            errors=self.errors,
            invalid_indexes=self.invalid_indexes,
        )


class Sanitizer:
    """Reconcile a spec against a payload using a registry of named rules.

    The registry maps rule-name tokens such as ``"int"`` or ``"phone[]"`` to
    :class:`~spec_sanitizer.rules.Rule` instances. A sanitizer holds no
    per-call state, so one instance can serve any number of callers.
    """

    def __init__(self, rules: cabc.Mapping[str, Rule] | None = None) -> None:
        self._rules: dict[str, Rule] = {}
        for token, rule in (rules or {}).items():
            self.register(token, rule)

    @property
    def rules(self) -> cabc.Mapping[str, Rule]:
        """Read-only view of the registered rules."""
        return types.MappingProxyType(self._rules)

    def __contains__(self, token: object) -> bool:
        """Return ``True`` if *token* names a registered rule."""
        return isinstance(token, str) and token in self._rules

    def __repr__(self) -> str:
        """Return a debug representation."""
        return f"Sanitizer(rules={sorted(self._rules)!r})"

    def register(self, token: str, rule: Rule, *, with_array: bool = False) -> Sanitizer:
        """Register *rule* under *token*, replacing any previous entry.

        With ``with_array=True`` the array form ``token + "[]"`` is also
        registered as a :class:`~spec_sanitizer.rules.TypedArrayRule`.
        """
        if not isinstance(token, str) or not token:
            msg = f"rule token must be a non-empty string, got {token!r}"
            raise ValueError(msg)
        if not isinstance(rule, Rule):
            msg = f"rule for {token!r} must expose sanitize(), got {type(rule).__name__}"
            raise InvalidRuleError(msg)
        self._rules[token] = rule
        if with_array:
            self._rules[token + ARRAY_SUFFIX] = TypedArrayRule(rule)
        return self

    def copy(self) -> Sanitizer:
        """Return a sanitizer with an independent copy of the registry."""
        return Sanitizer(self._rules)

    def resolve(self, token: object) -> Rule | None:
        """Return the rule registered for *token*, if any."""
        if not isinstance(token, str):
            return None
        return self._rules.get(token)

    def check_spec(self, spec: cabc.Mapping[str, t.Any]) -> dict[str, SanitizerError]:
        """Return an error report listing spec leaves with unknown tokens."""
        _require_mapping_spec(spec)
        return {
            join_key(path): SanitizerError.INVALID_SPEC_RULE
            for path, token in iter_leaves(spec)
            if self.resolve(token) is None
        }

    def sanitize_by_spec(
        self, spec: cabc.Mapping[str, t.Any], payload: t.Any
    ) -> SanitizeResult:
        """Sanitize *payload* against *spec*.

        Every declared leaf is looked up in the payload and passed through
        its rule. Problems are recorded in the returned report, keyed by the
        dotted path, and the offending leaf is left out of the sanitized
        payload. Only a non-mapping *spec* raises.
        """
        _require_mapping_spec(spec)
        report = _Report()
        if not isinstance(payload, cabc.Mapping):
            report.record("", SanitizerError.INVALID_PAYLOAD)
            return report.result({})

        flat_spec = flatten_paths(spec)
        flat_payload = flatten_paths(payload)

        for path in flat_payload:
            if path not in flat_spec:
                report.record(join_key(path), SanitizerError.EXTRA_FIELD)

        sanitized: dict[str, t.Any] = {}
        for path, token in flat_spec.items():
            self._sanitize_field(path, token, payload, flat_payload, sanitized, report)

        logger.debug(
            "Sanitized %d spec field(s) with %d error(s)",
            len(flat_spec),
            len(report.errors),
        )
        return report.result(sanitized)

    def _sanitize_field(
        self,
        path: KeyPath,
        token: object,
        payload: cabc.Mapping[str, t.Any],
        flat_payload: dict[KeyPath, t.Any],
        sanitized: dict[str, t.Any],
        report: _Report,
    ) -> None:
        key = join_key(path)
        if not has_key(payload, path):
            report.record(key, SanitizerError.KEY_DOES_NOT_EXIST)
            return
        rule = self.resolve(token)
        if rule is None:
            report.record(key, SanitizerError.INVALID_SPEC_RULE)
            return
        # Nested mappings (and empty ones) are not leaves of the flat view.
        raw = flat_payload[path] if path in flat_payload else get_value(payload, path)
        rejected = False

        def on_error(error: SanitizerError, indexes: list[int] | None = None, /) -> None:
            nonlocal rejected
            rejected = True
            report.record(key, error, indexes)

        value = rule.sanitize(raw, on_error)
        if rejected:
            return
        set_value(sanitized, path, value)


def _require_mapping_spec(spec: object) -> None:
    if not isinstance(spec, cabc.Mapping):
        msg = f"spec must be a mapping, got {type(spec).__name__}"
        raise InvalidSpecError(msg)


def standard_sanitizer() -> Sanitizer:
    """Return a new sanitizer with the standard scalar and array tokens."""
    return (
        Sanitizer()
        .register("int", IntegerRule(), with_array=True)
        .register("float", FloatRule(), with_array=True)
        .register("string", StringRule(), with_array=True)
        .register("phone", PhoneRule(), with_array=True)
    )


def standard_rules() -> dict[str, Rule]:
    """Return a fresh ``{token: rule}`` mapping of the standard tokens."""
    return dict(standard_sanitizer().rules)


# Shared default instance. Register custom tokens on a ``copy()`` instead.
STANDARD_SANITIZER: t.Final[Sanitizer] = standard_sanitizer()


__all__ = [
    "ARRAY_SUFFIX",
    "STANDARD_SANITIZER",
    "SanitizeResult",
    "Sanitizer",
    "standard_rules",
    "standard_sanitizer",
]
