"""Parse package.json and read declared versions across dependency sections."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..errors import ManifestParseError, PackageNotFoundError
from ..models import RawDependency

# Priority order used both for extraction and for version lookups.
SECTIONS = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
)


def _load(path: Path | str) -> dict[str, Any]:
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestParseError(f"{path} must contain a JSON object")
    return data


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    deps = data.get(name) or {}
    if not isinstance(deps, dict):
        raise ManifestParseError(f"'{name}' must be an object mapping names to versions")
    return deps


def extract(path: Path | str) -> list[RawDependency]:
    """Return every declared dependency, section by section.

    Sections: dependencies, devDependencies, optionalDependencies. A name
    declared in two sections is returned twice.
    """
    data = _load(path)
    deps: list[RawDependency] = []
    for section in SECTIONS:
        for name, version in _section(data, section).items():
            deps.append(RawDependency(name=name, declared_version=str(version)))

    return deps


def probe(path: Path | str, name: str) -> str:
    """Return the currently declared version of ``name``.

    The first section containing the package wins.
    """
    data = _load(path)
    for section in SECTIONS:
        deps = _section(data, section)
        if name in deps:
            return str(deps[name])

    raise PackageNotFoundError(name, str(path))
