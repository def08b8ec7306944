"""Pull-request summary and changed-file list rendering."""

from __future__ import annotations

from pathlib import Path

from .discovery import join_root
from .kinds import ManifestKind
from .models import UpdateReport


def render_markdown(report: UpdateReport) -> str:
    """Return a Markdown section per manifest listing its updated packages."""
    lines: list[str] = []
    for result in report.manifests:
        lines.append(f"## {result.path}")
        lines.append("")
        for update in result.updates:
            lines.append(f"* {update.name}: {update.old_version} => {update.new_version}")
        lines.append("")

    return "\n".join(lines) + "\n" if lines else ""


def render_file_list(report: UpdateReport, root: Path | str, kind: ManifestKind) -> str:
    """Return the space-separated absolute paths of every file the run changed.

    Each manifest is followed by its companion lock file when the kind has one.
    """
    files: list[str] = []
    for result in report.manifests:
        files.append(join_root(root, result.path))
        for companion in kind.companion_files(result.path):
            files.append(join_root(root, companion))

    return " ".join(files)
