"""Core update entrypoints.

This module MUST NOT contain CI-host-specific logic so it can be used by both
the action wrapper and the standalone CLI.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import structlog

from .commands import CommandRunner, run_command
from .discovery import find_files, join_root
from .kinds import ManifestKind, get_manifest_kind
from .models import CommandFailure, ManifestUpdateResult, UpdateReport
from .settings import Settings
from .updater import PackageUpdater

log = structlog.get_logger("dependency_updater.orchestrator")


class UpdateOrchestrator:
    """Run the package updater over every manifest of one kind under a root."""

    def __init__(
        self,
        kind: ManifestKind,
        settings: Settings | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self._kind = kind
        self._settings = settings or Settings(kind=kind.kind_id)
        self._updater = PackageUpdater(kind, self._settings, runner)

    def run(self, root: Path | str) -> UpdateReport:
        """Update all manifests under ``root`` and return the complete report.

        Manifests are processed in discovery order; those without a changed
        package are left out of the report. Any error other than a failed
        package-manager command aborts the whole run.
        """
        manifests = find_files(root, self._kind.suffix, exclude=self._settings.exclude_dirs)
        log.info(
            "orchestrator.manifests_found",
            root=str(root),
            kind=self._kind.kind_id,
            display_name=self._kind.display_name,
            count=len(manifests),
        )

        results: list[ManifestUpdateResult] = []
        failures: list[CommandFailure] = []
        for relative in manifests:
            file_failures: list[CommandFailure] = []
            updates = self._updater.update(join_root(root, relative), failures=file_failures)
            failures.extend(replace(failure, path=relative) for failure in file_failures)

            if updates:
                log.info("orchestrator.manifest_updated", path=relative, updates=len(updates))
                results.append(ManifestUpdateResult.from_iterable(relative, updates))

        return UpdateReport(manifests=tuple(results), failures=tuple(failures))


def update_repository(
    root: Path | str,
    kind: str | None = None,
    settings: Settings | None = None,
    runner: CommandRunner = run_command,
) -> UpdateReport:
    """Update every manifest of ``kind`` under ``root``.

    Params:
        root: directory to scan for manifests
        kind: manifest kind ID; defaults to ``settings.kind``
        settings: runtime options; defaults to built-in settings
        runner: command runner, replaced by stubs in tests

    Returns: the :class:`UpdateReport` for the run
    """
    settings = settings or Settings()
    manifest_kind = get_manifest_kind(kind or settings.kind)
    return UpdateOrchestrator(manifest_kind, settings, runner).run(root)
