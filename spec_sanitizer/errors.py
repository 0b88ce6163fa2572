"""Error kinds and exceptions used by spec-sanitizer."""

from __future__ import annotations

import enum
import typing as t


class SanitizerError(enum.StrEnum):
    """Kinds of problems recorded in a sanitization error report."""

    INVALID_PAYLOAD = "InvalidPayload"
    INVALID_SPEC_RULE = "InvalidSpecRule"
    INVALID_STRUCTURE_VALUE = "InvalidStructureValue"
    INVALID_VALUE = "InvalidValue"
    KEY_DOES_NOT_EXIST = "KeyDoesNotExist"
    EXTRA_FIELD = "ExtraField"


class SpecSanitizerError(Exception):
    """Base class for spec-sanitizer exceptions."""


class InvalidRuleError(SpecSanitizerError, TypeError):
    """Raised when an object that is not a rule is used as one."""


class InvalidSpecError(SpecSanitizerError, TypeError):
    """Raised when a spec is not a mapping."""


class SpecFileError(SpecSanitizerError, ValueError):
    """Raised when a spec file cannot be understood."""


class SanitizationError(SpecSanitizerError, ValueError):
    """Raised on request when a sanitization produced errors."""

    def __init__(self, errors: t.Mapping[str, SanitizerError]) -> None:
        self.errors = dict(errors)
        details = ", ".join(
            f"{path or '<root>'}={kind}" for path, kind in sorted(self.errors.items())
        )
        super().__init__(f"payload failed sanitization: {details}")


__all__ = [
    "InvalidRuleError",
    "InvalidSpecError",
    "SanitizationError",
    "SanitizerError",
    "SpecFileError",
    "SpecSanitizerError",
]
