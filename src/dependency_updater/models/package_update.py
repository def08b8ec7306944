"""Package-level models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RawDependency:
    """A dependency as declared in a manifest, before any update."""

    name: str
    declared_version: str


@dataclass(frozen=True)
class PackageUpdate:
    """A package whose declared version changed during one update run."""

    name: str
    old_version: str
    new_version: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Package name must be non-empty")
        if self.old_version == self.new_version:
            raise ValueError(f"Package '{self.name}' did not change version")

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "oldVersion": self.old_version,
            "newVersion": self.new_version,
        }
