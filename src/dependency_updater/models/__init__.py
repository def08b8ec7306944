"""Data models for the dependency update pipeline."""

from __future__ import annotations

from .package_update import PackageUpdate, RawDependency
from .update_report import CommandFailure, ManifestUpdateResult, UpdateReport

__all__ = [
    "CommandFailure",
    "ManifestUpdateResult",
    "PackageUpdate",
    "RawDependency",
    "UpdateReport",
]
