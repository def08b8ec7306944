"""Shared pytest fixtures and package-manager stubs."""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from dependency_updater.commands import CommandResult


@pytest.fixture(autouse=True)
def log_events():
    """Capture structlog events instead of printing them to stdout."""
    with capture_logs() as events:
        yield events


def write_package_json(path: Path, **sections: dict[str, str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(sections, indent=2), encoding="utf-8")
    return path


def write_csproj(path: Path, *groups: dict[str, str]) -> Path:
    """Write an SDK-style project; each positional arg is one ItemGroup."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ['<Project Sdk="Microsoft.NET.Sdk">']
    for refs in groups:
        lines.append("  <ItemGroup>")
        for name, version in refs.items():
            lines.append(f'    <PackageReference Include="{name}" Version="{version}" />')
        lines.append("  </ItemGroup>")
    lines.append("</Project>")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


class NpmStub:
    """Stand-in for ``npm update <name>`` that bumps versions in package.json."""

    def __init__(self, bumps: dict[str, str] | None = None, exit_codes: dict[str, int | None] | None = None):
        self.bumps = bumps or {}
        self.exit_codes = exit_codes or {}
        self.calls: list[tuple[list[str], str]] = []

    def __call__(self, args, cwd, timeout=None, attempts=1, wait=0.0) -> CommandResult:
        args = list(args)
        self.calls.append((args, str(cwd)))
        name = args[-1]
        manifest = Path(cwd) / "package.json"
        if name in self.bumps:
            data = json.loads(manifest.read_text(encoding="utf-8"))
            for section in ("dependencies", "devDependencies", "optionalDependencies"):
                if name in (data.get(section) or {}):
                    data[section][name] = self.bumps[name]
            manifest.write_text(json.dumps(data, indent=2), encoding="utf-8")
            (Path(cwd) / "package-lock.json").write_text("{}", encoding="utf-8")
        code = self.exit_codes.get(name, 0)
        return CommandResult(args=tuple(args), exit_code=code, output="" if code == 0 else "npm ERR!")


class DotnetStub:
    """Stand-in for ``dotnet add <project> package <name>``."""

    def __init__(self, bumps: dict[str, str] | None = None):
        self.bumps = bumps or {}
        self.calls: list[tuple[list[str], str]] = []

    def __call__(self, args, cwd, timeout=None, attempts=1, wait=0.0) -> CommandResult:
        args = list(args)
        self.calls.append((args, str(cwd)))
        project, name = args[2], args[4]
        if name in self.bumps:
            tree = ET.parse(project)
            for ref in tree.getroot().iter("PackageReference"):
                if ref.get("Include") == name:
                    ref.set("Version", self.bumps[name])
            tree.write(project, encoding="unicode")
        return CommandResult(args=tuple(args), exit_code=0)


@pytest.fixture
def npm_stub():
    return NpmStub()


@pytest.fixture
def dotnet_stub():
    return DotnetStub()
