"""Parse .csproj project files for NuGet package references."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from collections.abc import Iterator

import structlog

from ..errors import ManifestParseError, PackageNotFoundError
from ..models import RawDependency

log = structlog.get_logger("dependency_updater.parsers.csproj")

# Legacy (non SDK-style) projects declare the MSBuild namespace.
_NS = "{http://schemas.microsoft.com/developer/msbuild/2003}"


def _load(path: Path | str) -> tuple[ET.Element, str]:
    # Visual Studio writes project files with a UTF-8 BOM.
    text = Path(path).read_text(encoding="utf-8-sig")
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ManifestParseError(f"Invalid XML in {path}: {exc}") from exc

    for ns in ("", _NS):
        if root.tag == f"{ns}Project":
            return root, ns

    raise ManifestParseError(f"{path} has root element <{root.tag}>, expected <Project>")


def _iter_references(root: ET.Element, ns: str, path: Path | str) -> Iterator[RawDependency]:
    for group in root.findall(f"{ns}ItemGroup"):
        # Groups holding only Compile/None/etc. items have no references.
        for ref in group.findall(f"{ns}PackageReference"):
            name = ref.get("Include")
            version = ref.get("Version")
            if not name or version is None:
                log.debug(
                    "csproj.reference_skipped",
                    path=str(path),
                    include=name,
                    reason="missing Include or Version attribute",
                )
                continue
            yield RawDependency(name=name, declared_version=version)


def extract(path: Path | str) -> list[RawDependency]:
    """Return every PackageReference across all ItemGroups, in document order."""
    root, ns = _load(path)
    return list(_iter_references(root, ns, path))


def probe(path: Path | str, name: str) -> str:
    """Return the Version of the first PackageReference whose Include is ``name``."""
    root, ns = _load(path)
    for dep in _iter_references(root, ns, path):
        if dep.name == name:
            return dep.declared_version

    raise PackageNotFoundError(name, str(path))
