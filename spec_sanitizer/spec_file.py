"""JSON spec files.

A spec file wraps a spec mapping with a schema version and an optional
description::

    {
      "version": "1.0",
      "description": "signup form",
      "spec": {"name": "string", "phones": "phone[]"}
    }
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import json
import logging
import typing as t

from .errors import SpecFileError

if t.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_SCHEMA_VERSION: t.Final[str] = "1.0"


def _parse_version(version_str: str) -> tuple[int, int]:
    """Parse a ``"major.minor"`` version string into a comparable tuple.

    Raises
    ------
    SpecFileError
        If the string is not two dot-separated non-negative integers.
    """
    parts = version_str.strip().split(".")
    if len(parts) != 2:
        msg = f"Invalid spec version {version_str!r}; expected 'major.minor'"
        raise SpecFileError(msg)
    try:
        major, minor = int(parts[0]), int(parts[1])
    except ValueError:
        msg = f"Invalid spec version {version_str!r}; expected numeric 'major.minor'"
        raise SpecFileError(msg) from None
    if major < 0 or minor < 0:
        msg = f"Invalid spec version {version_str!r}; components must be non-negative"
        raise SpecFileError(msg)
    return (major, minor)


def _check_version(raw: object) -> None:
    """Reject non-string versions and majors newer than the running schema."""
    if not isinstance(raw, str):
        actual = type(raw).__name__
        msg = f"Invalid spec version field: expected str, got {actual}"
        raise SpecFileError(msg)
    if _parse_version(raw)[0] > _parse_version(_SCHEMA_VERSION)[0]:
        msg = f"Unsupported spec schema version {raw!r}; this release reads {_SCHEMA_VERSION!r}"
        raise SpecFileError(msg)


@dc.dataclass(slots=True)
class SpecFile:
    """A spec mapping together with its file metadata."""

    SCHEMA_VERSION: t.ClassVar[str] = _SCHEMA_VERSION

    spec: dict[str, t.Any]
    version: str = _SCHEMA_VERSION
    description: str = ""

    def to_dict(self) -> dict[str, t.Any]:
        """Return a JSON-serializable mapping."""
        return {
            "version": self.version,
            "description": self.description,
            "spec": self.spec,
        }

    @classmethod
    def from_dict(cls, data: cabc.Mapping[str, t.Any]) -> SpecFile:
        """Construct from a JSON-compatible mapping.

        A missing ``version`` is read as the current schema. Other versions
        with the same major are kept as written; unknown fields are ignored.
        """
        if not isinstance(data, cabc.Mapping):
            msg = f"Spec file must contain a JSON object, got {type(data).__name__}"
            raise SpecFileError(msg)
        version = data.get("version", cls.SCHEMA_VERSION)
        _check_version(version)
        spec = data.get("spec")
        if not isinstance(spec, cabc.Mapping):
            msg = f"Spec file 'spec' must be an object, got {type(spec).__name__}"
            raise SpecFileError(msg)
        return cls(
            spec=dict(spec),
            version=version,
            description=str(data.get("description") or ""),
        )

    def save(self, path: Path) -> None:
        """Write this spec to *path* as JSON, creating directories as needed."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self.to_dict(), indent=2) + "\n", encoding="utf-8")
        logger.debug("Saved spec file %s", path)

    @classmethod
    def load(cls, path: Path) -> SpecFile:
        """Load a spec from the JSON file at *path*."""
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except UnicodeDecodeError as exc:
            msg = f"Spec file {path} is not valid UTF-8: {exc}"
            raise SpecFileError(msg) from exc
        except json.JSONDecodeError as exc:
            msg = f"Spec file {path} is not valid JSON: {exc}"
            raise SpecFileError(msg) from exc
        logger.debug("Loaded spec file %s", path)
        return cls.from_dict(data)


__all__ = ["SpecFile"]
