"""Global test configuration and shared fixtures."""

from __future__ import annotations

import typing as t

import pytest

from spec_sanitizer.sanitizer import STANDARD_SANITIZER

if t.TYPE_CHECKING:
    from spec_sanitizer.sanitizer import Sanitizer

pytest_plugins = ("pytester",)


@pytest.fixture
def sanitizer() -> Sanitizer:
    """Return an isolated copy of the standard sanitizer."""
    return STANDARD_SANITIZER.copy()


@pytest.fixture
def sample_spec() -> dict[str, t.Any]:
    """Return a spec exercising every standard token at two depths."""
    atoms = {"foo": "int", "bar": "float", "baz": "phone", "qux": "string"}
    return {
        **atoms,
        "_nested": {
            "foo": "int[]",
            "bar": "float[]",
            "baz": "phone[]",
            "qux": "string[]",
            "_nestedAtoms": dict(atoms),
        },
    }


@pytest.fixture
def sample_payload() -> dict[str, t.Any]:
    """Return a raw payload matching :func:`sample_spec`."""
    atoms = {
        "foo": "123",
        "bar": "123.45",
        "baz": "8 (800) 5553535",
        "qux": "string",
    }
    return {
        **atoms,
        "_nested": {
            "foo": [123, 345, "678"],
            "bar": [123.45, "56.78"],
            "baz": ["+7 (914) 700-24-24", "8 (800) 555-35-35"],
            "qux": ["foo", "bar", "baz"],
            "_nestedAtoms": dict(atoms),
        },
    }
