"""Tests for external command execution."""

from __future__ import annotations

import sys

import pytest

from dependency_updater.commands import resolve_executable, run_command
from dependency_updater.errors import ToolNotFoundError


def _python(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestRunCommand:
    def test_success_captures_output(self, tmp_path):
        result = run_command(_python("print('updated')"), tmp_path)

        assert result.ok
        assert result.exit_code == 0
        assert "updated" in result.output

    def test_runs_in_working_directory(self, tmp_path):
        run_command(_python("open('marker', 'w').close()"), tmp_path)

        assert (tmp_path / "marker").exists()

    def test_non_zero_exit_is_returned_not_raised(self, tmp_path):
        result = run_command(_python("import sys; sys.stderr.write('boom'); sys.exit(3)"), tmp_path)

        assert not result.ok
        assert result.exit_code == 3
        assert "boom" in result.output

    def test_timeout_returns_none_exit_code(self, tmp_path):
        result = run_command(_python("import time; time.sleep(10)"), tmp_path, timeout=0.5)

        assert result.exit_code is None
        assert not result.ok

    def test_failed_command_is_retried(self, tmp_path):
        # Fails until it has run three times.
        code = (
            "import pathlib, sys\n"
            "p = pathlib.Path('count')\n"
            "n = int(p.read_text()) + 1 if p.exists() else 1\n"
            "p.write_text(str(n))\n"
            "sys.exit(0 if n >= 3 else 1)\n"
        )

        result = run_command(_python(code), tmp_path, attempts=5)

        assert result.ok
        assert (tmp_path / "count").read_text() == "3"

    def test_last_failure_returned_after_attempts_exhausted(self, tmp_path):
        code = (
            "import pathlib, sys\n"
            "p = pathlib.Path('count')\n"
            "n = int(p.read_text()) + 1 if p.exists() else 1\n"
            "p.write_text(str(n))\n"
            "sys.exit(4)\n"
        )

        result = run_command(_python(code), tmp_path, attempts=2)

        assert result.exit_code == 4
        assert (tmp_path / "count").read_text() == "2"

    def test_missing_tool_raises(self, tmp_path):
        with pytest.raises(ToolNotFoundError) as excinfo:
            run_command(["definitely-not-a-package-manager", "update", "x"], tmp_path)

        assert excinfo.value.tool == "definitely-not-a-package-manager"


class TestResolveExecutable:
    def test_absolute_path_is_kept(self):
        assert resolve_executable(sys.executable) == sys.executable

    def test_missing_absolute_path_raises(self, tmp_path):
        with pytest.raises(ToolNotFoundError):
            resolve_executable(str(tmp_path / "npm"))
