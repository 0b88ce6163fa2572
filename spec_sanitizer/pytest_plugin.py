"""Pytest plugin providing the ``spec_sanitizer`` and ``load_spec`` fixtures."""

from __future__ import annotations

import collections.abc as cabc
import logging
import os
import typing as t
from pathlib import Path

import pytest

from .sanitizer import STANDARD_SANITIZER, Sanitizer
from .spec_file import SpecFile

if t.TYPE_CHECKING:  # pragma: no cover - used only for typing
    from .rules import Rule

logger = logging.getLogger(__name__)

# Environment override for the spec directory, consulted after the CLI
# option and before the ini setting.
SPEC_DIR_ENV: t.Final[str] = "SPEC_SANITIZER_SPEC_DIR"

_DEFAULT_SPEC_DIR: t.Final[str] = "specs"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line and ini options for the plugin."""
    group = parser.getgroup("spec_sanitizer")
    group.addoption(
        "--spec-sanitizer-spec-dir",
        action="store",
        dest="spec_sanitizer_spec_dir",
        default=None,
        help=(
            "Directory the load_spec fixture reads <name>.json spec files from. "
            "Overrides SPEC_SANITIZER_SPEC_DIR and the pytest.ini setting."
        ),
    )
    parser.addini(
        "spec_sanitizer_spec_dir",
        "Directory (relative to rootdir) holding JSON spec files.",
        default=_DEFAULT_SPEC_DIR,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin-specific markers."""
    config.addinivalue_line(
        "markers",
        (
            "spec_sanitizer(rules: dict[str, Rule]): register extra rule tokens "
            "on the spec_sanitizer fixture for a single test."
        ),
    )


def _spec_dir(config: pytest.Config) -> Path:
    """Return the configured spec directory, resolved against rootdir."""
    # Priority order: CLI option > environment variable > INI setting
    raw = (
        config.getoption("spec_sanitizer_spec_dir")
        or os.getenv(SPEC_DIR_ENV)
        or config.getini("spec_sanitizer_spec_dir")
        or _DEFAULT_SPEC_DIR
    )
    path = Path(str(raw))
    if not path.is_absolute():
        path = config.rootpath / path
    return path


def _marker_rules(request: pytest.FixtureRequest) -> cabc.Mapping[str, Rule]:
    """Return the extra rules requested through the ``spec_sanitizer`` marker."""
    marker = request.node.get_closest_marker("spec_sanitizer")
    if marker is None:
        return {}
    rules = marker.kwargs.get("rules", {})
    if not isinstance(rules, cabc.Mapping):
        msg = (
            "spec_sanitizer marker 'rules' must be a mapping of token to rule, "
            f"got {type(rules).__name__}"
        )
        raise TypeError(msg)
    return rules


@pytest.fixture
def spec_sanitizer(request: pytest.FixtureRequest) -> Sanitizer:
    """Provide a fresh standard :class:`Sanitizer` for the current test."""
    sanitizer = STANDARD_SANITIZER.copy()
    try:
        for token, rule in _marker_rules(request).items():
            sanitizer.register(token, rule)
    except Exception:
        logger.exception("Error during spec_sanitizer fixture setup")
        raise
    return sanitizer


@pytest.fixture
def load_spec(request: pytest.FixtureRequest) -> t.Callable[[str], dict[str, t.Any]]:
    """Provide a loader returning the spec stored as ``<name>.json``."""
    spec_dir = _spec_dir(request.config)

    def load(name: str) -> dict[str, t.Any]:
        filename = name if name.endswith(".json") else f"{name}.json"
        return SpecFile.load(spec_dir / filename).spec

    return load
