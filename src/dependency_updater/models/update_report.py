"""Per-manifest results and the report built from them."""

from __future__ import annotations

from dataclasses import dataclass
from collections.abc import Iterable

from .package_update import PackageUpdate


@dataclass(frozen=True)
class ManifestUpdateResult:
    """Packages that changed in a single manifest.

    ``path`` is relative to the scan root and keeps its leading separator, so
    ``root + path`` gives back the absolute manifest path.
    """

    path: str
    updates: tuple[PackageUpdate, ...]

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("Manifest path must be non-empty")
        if not self.updates:
            raise ValueError("A manifest result must contain at least one update")

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "updates": [update.to_dict() for update in self.updates],
        }

    @classmethod
    def from_iterable(cls, path: str, updates: Iterable[PackageUpdate]) -> ManifestUpdateResult:
        return cls(path=path, updates=tuple(updates))


@dataclass(frozen=True)
class CommandFailure:
    """A package-manager invocation that exited non-zero or timed out.

    In a report ``path`` is root-relative like ``ManifestUpdateResult.path``;
    ``exit_code`` is None for a timeout.
    """

    path: str
    package: str
    exit_code: int | None
    output: str = ""

    @property
    def timed_out(self) -> bool:
        return self.exit_code is None

    def to_dict(self) -> dict[str, object]:
        return {
            "path": self.path,
            "package": self.package,
            "exitCode": self.exit_code,
            "output": self.output,
        }


@dataclass(frozen=True)
class UpdateReport:
    """Immutable outcome of one orchestration run, in discovery order."""

    manifests: tuple[ManifestUpdateResult, ...] = ()
    failures: tuple[CommandFailure, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.manifests)

    def __iter__(self):
        return iter(self.manifests)

    def __len__(self) -> int:
        return len(self.manifests)

    @property
    def update_count(self) -> int:
        return sum(len(result.updates) for result in self.manifests)
