"""CI entrypoint: run the updater and publish its outputs.

The root path comes from ``--path`` or the ``INPUT_PATH`` action input. The
markdown summary and the changed-file list are written as the ``markdown`` and
``files`` step outputs (``$GITHUB_OUTPUT``); the markdown is also appended to
``$GITHUB_STEP_SUMMARY``. Any updater error fails the step with its message.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import uuid
from pathlib import Path

import structlog

from .core import update_repository
from .errors import UpdaterError
from .kinds import get_known_kinds, get_manifest_kind
from .logging_setup import setup_logging
from .report import aggregate
from .settings import load_settings
from .summary import render_file_list, render_markdown

log = structlog.get_logger("dependency_updater.action")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Update declared package versions under a directory.")
    parser.add_argument(
        "--path",
        type=Path,
        default=None,
        help="Root directory to search for manifests (default: $INPUT_PATH)",
    )
    parser.add_argument("--kind", choices=get_known_kinds(), default=None)
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON settings file")
    parser.add_argument(
        "--exclude",
        action="append",
        default=None,
        metavar="DIR",
        help="Directory name to skip during discovery (repeatable)",
    )
    parser.add_argument(
        "--fail-on-command-error",
        action="store_true",
        default=None,
        help="Abort when a package-manager command fails",
    )
    parser.add_argument("--json", action="store_true", help="Print the report as JSON on stdout")
    return parser.parse_args(argv)


def _resolve_root(arg: Path | None) -> Path:
    if arg is not None:
        return arg
    env_path = os.getenv("INPUT_PATH", "").strip()
    if not env_path:
        raise UpdaterError("Input required and not supplied: path")
    return Path(env_path)


def write_outputs(outputs: dict[str, str], output_file: str | None = None) -> None:
    """Append step outputs using the multiline ``name<<delimiter`` syntax."""
    target = output_file or os.getenv("GITHUB_OUTPUT")
    if not target:
        return
    with open(target, "a", encoding="utf-8") as fh:
        for name, value in outputs.items():
            delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
            fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def escape_annotation(message: str) -> str:
    """Escape a workflow-command message so it stays on one line."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def write_step_summary(markdown: str) -> None:
    target = os.getenv("GITHUB_STEP_SUMMARY")
    if not target or not markdown:
        return
    with open(target, "a", encoding="utf-8") as fh:
        fh.write(markdown)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging()

    try:
        root = _resolve_root(args.path)
        settings = load_settings(args.config).with_overrides(
            kind=args.kind,
            exclude_dirs=tuple(args.exclude) if args.exclude else None,
            fail_on_command_error=args.fail_on_command_error,
        )
        kind = get_manifest_kind(settings.kind)
        report = update_repository(root, settings=settings)
    except UpdaterError as exc:
        log.error("action.failed", error=str(exc))
        print(f"::error::{escape_annotation(str(exc))}", file=sys.stderr)
        return 1

    markdown = render_markdown(report)
    files = render_file_list(report, root, kind)
    write_outputs({"markdown": markdown, "files": files})
    write_step_summary(markdown)

    for failure in report.failures:
        status = "timed out" if failure.timed_out else f"exited with {failure.exit_code}"
        message = f"{failure.package} in {failure.path}: package manager {status}"
        print(f"::warning::{escape_annotation(message)}", file=sys.stderr)

    if args.json:
        print(json.dumps(aggregate(report), indent=2))

    log.info("action.succeeded", root=str(root), manifests=len(report), updates=report.update_count)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
