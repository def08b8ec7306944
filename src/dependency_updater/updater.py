"""Per-manifest update loop."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from .commands import CommandRunner, run_command
from .errors import UpdateCommandError
from .kinds import ManifestKind
from .models import CommandFailure, PackageUpdate
from .settings import Settings

log = structlog.get_logger("dependency_updater.updater")


class PackageUpdater:
    """Update every package declared in one manifest, one package at a time.

    The package manager rewrites the manifest (and its lock file) in place;
    this class only reads the manifest before and after each command and
    reports the packages whose declared version changed.
    """

    def __init__(
        self,
        kind: ManifestKind,
        settings: Settings | None = None,
        runner: CommandRunner = run_command,
    ) -> None:
        self._kind = kind
        self._settings = settings or Settings(kind=kind.kind_id)
        self._runner = runner

    @property
    def kind(self) -> ManifestKind:
        return self._kind

    def update(
        self,
        file_path: Path | str,
        failures: list[CommandFailure] | None = None,
    ) -> list[PackageUpdate]:
        """Update the manifest at ``file_path`` and return the changed packages.

        A manifest that no longer exists yields no updates. Failed commands are
        appended to ``failures`` unless the settings make them fatal.
        """
        path = str(file_path)
        if not os.path.isfile(path):
            log.info("updater.manifest_missing", path=path)
            return []

        updates: list[PackageUpdate] = []
        working_directory = os.path.dirname(path) or "."
        executable = self._settings.executable_for(self._kind.kind_id, self._kind.executable)

        for dependency in self._kind.extract(path):
            old_version = dependency.declared_version
            command = self._kind.build_command(executable, path, dependency.name)

            result = self._runner(
                command,
                working_directory,
                timeout=self._settings.command_timeout,
                attempts=self._settings.command_attempts,
                wait=self._settings.retry_wait,
            )
            if not result.ok:
                self._handle_failure(path, dependency.name, result.exit_code, result.output, failures)

            new_version = self._kind.probe(path, dependency.name)
            log.info(
                "updater.package_checked",
                path=path,
                package=dependency.name,
                old_version=old_version,
                new_version=new_version,
            )
            if old_version != new_version:
                updates.append(
                    PackageUpdate(name=dependency.name, old_version=old_version, new_version=new_version)
                )

        return updates

    def _handle_failure(
        self,
        path: str,
        package: str,
        exit_code: int | None,
        output: str,
        failures: list[CommandFailure] | None,
    ) -> None:
        log.warning(
            "updater.command_failed",
            path=path,
            package=package,
            exit_code=exit_code,
            output=output,
        )
        if self._settings.fail_on_command_error:
            raise UpdateCommandError(package, exit_code, output)
        if failures is not None:
            failures.append(
                CommandFailure(path=path, package=package, exit_code=exit_code, output=output)
            )
