"""Execution of external package-manager commands."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from collections.abc import Callable, Sequence
from typing import TypeAlias

import structlog
from tenacity import retry, retry_if_result, stop_after_attempt, wait_fixed

from .errors import ToolNotFoundError

log = structlog.get_logger("dependency_updater.commands")

DEFAULT_TIMEOUT = 600.0


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Exit status and combined output of a finished command.

    ``exit_code`` is None when the command was killed after the timeout.
    """

    args: tuple[str, ...]
    exit_code: int | None
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


# Signature shared by the real runner and the stubs used in tests.
CommandRunner: TypeAlias = Callable[..., CommandResult]


def resolve_executable(tool: str) -> str:
    """Return the absolute path of ``tool``, raising if it is not installed."""
    if Path(tool).is_absolute():
        if Path(tool).is_file():
            return tool
        raise ToolNotFoundError(tool)

    found = shutil.which(tool)
    if found is None:
        raise ToolNotFoundError(tool)
    return found


def _invoke(args: tuple[str, ...], cwd: str, timeout: float | None) -> CommandResult:
    log.debug("command.start", args=list(args), cwd=cwd)
    try:
        proc = subprocess.run(
            list(args),
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ToolNotFoundError(args[0]) from exc
    except subprocess.TimeoutExpired as exc:
        log.warning("command.timeout", args=list(args), cwd=cwd, timeout=timeout)
        partial = exc.output or ""
        if isinstance(partial, bytes):
            partial = partial.decode("utf-8", errors="replace")
        return CommandResult(args=args, exit_code=None, output=partial)

    output = "\n".join(part.strip() for part in (proc.stdout, proc.stderr) if part and part.strip())
    log.debug("command.finished", args=list(args), exit_code=proc.returncode)
    return CommandResult(args=args, exit_code=proc.returncode, output=output)


def _last_result(retry_state) -> CommandResult:
    return retry_state.outcome.result()


def run_command(
    args: Sequence[str],
    cwd: Path | str,
    timeout: float | None = DEFAULT_TIMEOUT,
    attempts: int = 1,
    wait: float = 0.0,
) -> CommandResult:
    """Run ``args`` in ``cwd`` and return its result without raising on failure.

    A non-zero exit or a timeout is retried until ``attempts`` runs have been
    made; the last result is returned either way. A missing executable raises
    :class:`ToolNotFoundError`.
    """
    if not args:
        raise ValueError("Command must not be empty")
    args = (resolve_executable(args[0]), *args[1:])

    runner = retry(
        stop=stop_after_attempt(max(attempts, 1)),
        wait=wait_fixed(wait),
        retry=retry_if_result(lambda result: not result.ok),
        retry_error_callback=_last_result,
    )(_invoke)
    return runner(tuple(args), str(cwd), timeout)
