"""Spec-driven validation and coercion of untyped nested payloads.

A spec is a nested mapping whose leaves name rules (``"int"``, ``"phone[]"``
and so on). :meth:`Sanitizer.sanitize_by_spec` walks the spec, coerces each
declared payload field through its rule, and returns the sanitized payload
together with a report of every problem keyed by dotted path.
"""

from __future__ import annotations

from .errors import (
    InvalidRuleError,
    InvalidSpecError,
    SanitizationError,
    SanitizerError,
    SpecFileError,
    SpecSanitizerError,
)
from .keypath import flatten, get_value, has_key, set_value
from .predicates import (
    is_array,
    is_float,
    is_integer,
    is_key_exist,
    is_keys_exist,
    is_phone,
    is_string,
    is_typed_array,
)
from .rules import (
    ErrorCallback,
    FloatRule,
    IntegerRule,
    PhoneRule,
    Rule,
    ScalarRule,
    StringRule,
    StructuralRule,
    TypedArrayRule,
)
from .sanitizer import (
    STANDARD_SANITIZER,
    SanitizeResult,
    Sanitizer,
    standard_rules,
    standard_sanitizer,
)
from .spec_file import SpecFile

__all__ = [
    "STANDARD_SANITIZER",
    "ErrorCallback",
    "FloatRule",
    "IntegerRule",
    "InvalidRuleError",
    "InvalidSpecError",
    "PhoneRule",
    "Rule",
    "SanitizationError",
    "SanitizeResult",
    "Sanitizer",
    "SanitizerError",
    "ScalarRule",
    "SpecFile",
    "SpecFileError",
    "SpecSanitizerError",
    "StringRule",
    "StructuralRule",
    "TypedArrayRule",
    "flatten",
    "get_value",
    "has_key",
    "is_array",
    "is_float",
    "is_integer",
    "is_key_exist",
    "is_keys_exist",
    "is_phone",
    "is_string",
    "is_typed_array",
    "set_value",
    "standard_rules",
    "standard_sanitizer",
]
