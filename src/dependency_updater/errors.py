"""Error types raised by the update pipeline."""

from __future__ import annotations


class UpdaterError(RuntimeError):
    """Base error for failures that abort an update run."""


class DiscoveryError(UpdaterError):
    """Raised when the scan root is missing or is not a directory."""


class ManifestParseError(UpdaterError):
    """Raised when a manifest cannot be decoded into dependencies."""


class PackageNotFoundError(UpdaterError):
    """Raised when a package is not declared anywhere in a manifest."""

    def __init__(self, package: str, path: str | None = None):
        self.package = package
        self.path = path
        location = f" in {path}" if path else ""
        super().__init__(f"Package '{package}' not found{location}")


class ToolNotFoundError(UpdaterError):
    """Raised when the package-manager executable cannot be located."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"Unable to locate executable '{tool}' on PATH")


class UpdateCommandError(UpdaterError):
    """Raised for a failed update command when failures are configured as fatal."""

    def __init__(self, package: str, exit_code: int | None, output: str = ""):
        self.package = package
        self.exit_code = exit_code
        self.output = output
        status = "timed out" if exit_code is None else f"exited with {exit_code}"
        super().__init__(f"Update command for '{package}' {status}")


class UnknownKindError(UpdaterError, ValueError):
    """Raised when a manifest kind ID is not found in the registry."""
