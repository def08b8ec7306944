"""Repository and manifest discovery utilities."""

from __future__ import annotations

import os
from pathlib import Path
from collections.abc import Collection

from .errors import DiscoveryError


def find_files(
    root: Path | str,
    suffix: str,
    exclude: Collection[str] = (),
) -> list[str]:
    """Find regular files under root whose path ends with ``suffix``.

    Entries are visited in the order the directory listing returns them; no
    sort is applied. Returned paths have the root prefix stripped and keep
    their leading separator (``/a/package.json``), so joining them back onto
    the normalised root yields the full path (relative roots such as ``.``
    included).

    Directory names in ``exclude`` are not descended into.
    """
    base = os.path.normpath(str(root))
    if not os.path.isdir(base):
        raise DiscoveryError(f"Root path does not exist or is not a directory: {base}")

    found: list[str] = []

    # Children are joined onto ``base`` as strings so the root prefix is kept
    # even when base is "." (Path(".").iterdir() drops it).
    def walk(current: str) -> None:
        try:
            names = os.listdir(current)
        except OSError as exc:
            raise DiscoveryError(f"Failed to list directory {current}: {exc}") from exc

        for name in names:
            full = os.path.join(current, name)
            if os.path.isfile(full):
                if full.endswith(suffix):
                    found.append(full[len(base):])
            elif os.path.isdir(full):
                if name in exclude:
                    continue
                walk(full)

    walk(base)
    return found


def join_root(root: Path | str, relative: str) -> str:
    """Rejoin a path produced by :func:`find_files` with its scan root."""
    return os.path.normpath(str(root)) + relative
