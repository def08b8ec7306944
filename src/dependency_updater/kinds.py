"""Registry of supported manifest kinds.

Each kind binds the file suffix used for discovery to its extract/probe
functions, the update command of its package manager and, where one exists,
the lock file that travels with the manifest. The orchestrator is written
against this capability set only, so it never branches on the kind itself.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from collections.abc import Callable
from typing import TypeAlias

from .errors import UnknownKindError
from .models import RawDependency
from .parsers import csproj, package_json

ExtractFunction: TypeAlias = Callable[[str], list[RawDependency]]
ProbeFunction: TypeAlias = Callable[[str, str], str]
CommandBuilder: TypeAlias = Callable[[str, str, str], list[str]]


@dataclass(slots=True, frozen=True)
class ManifestKind:
    """Capabilities of one manifest kind."""

    kind_id: str
    display_name: str
    suffix: str
    executable: str
    extract: ExtractFunction
    probe: ProbeFunction
    build_command: CommandBuilder
    lock_file: str | None = None

    def companion_files(self, manifest_path: str) -> list[str]:
        """Return sibling files that must be committed with ``manifest_path``."""
        if self.lock_file is None:
            return []
        return [os.path.join(os.path.dirname(manifest_path), self.lock_file)]


def _npm_update_command(executable: str, manifest_path: str, package: str) -> list[str]:
    return [executable, "update", package]


def _dotnet_add_command(executable: str, manifest_path: str, package: str) -> list[str]:
    return [executable, "add", manifest_path, "package", package]


# Add new kinds here by providing their parser module and update command.
MANIFEST_KINDS: dict[str, ManifestKind] = {
    "npm": ManifestKind(
        kind_id="npm",
        display_name="npm package.json",
        suffix="package.json",
        executable="npm",
        extract=package_json.extract,
        probe=package_json.probe,
        build_command=_npm_update_command,
        lock_file="package-lock.json",
    ),
    "nuget": ManifestKind(
        kind_id="nuget",
        display_name="NuGet project file",
        suffix=".csproj",
        executable="dotnet",
        extract=csproj.extract,
        probe=csproj.probe,
        build_command=_dotnet_add_command,
    ),
}


def get_manifest_kind(kind_id: str) -> ManifestKind:
    """Return the kind for the given ID, or raise UnknownKindError."""
    kind = MANIFEST_KINDS.get(kind_id)
    if kind is None:
        known = ", ".join(sorted(MANIFEST_KINDS.keys()))
        raise UnknownKindError(f"Unknown manifest kind '{kind_id}'. Known kinds: {known}")
    return kind


def get_known_kinds() -> list[str]:
    """Return a sorted list of all registered kind IDs."""
    return sorted(MANIFEST_KINDS.keys())
