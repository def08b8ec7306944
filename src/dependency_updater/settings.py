"""Configuration loader for the update pipeline.

Settings are read from a JSON file and validated against ``SETTINGS_SCHEMA``
with jsonschema. Every key is optional; a missing file location means the
defaults are used. The file location is resolved from an explicit argument,
then the ``DEPENDENCY_UPDATER_CONFIG`` environment variable.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from collections.abc import Iterable
from typing import Any

from jsonschema import Draft202012Validator

from .commands import DEFAULT_TIMEOUT
from .errors import UpdaterError
from .kinds import get_known_kinds

CONFIG_PATH_ENV_VAR = "DEPENDENCY_UPDATER_CONFIG"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "kind": {"type": "string", "minLength": 1},
        "executables": {
            "type": "object",
            "additionalProperties": {"type": "string", "minLength": 1},
        },
        "commandTimeout": {"type": "number", "exclusiveMinimum": 0},
        "commandAttempts": {"type": "integer", "minimum": 1},
        "retryWait": {"type": "number", "minimum": 0},
        "failOnCommandError": {"type": "boolean"},
        "excludeDirs": {
            "type": "array",
            "items": {"type": "string", "minLength": 1},
            "uniqueItems": True,
        },
    },
}


class ConfigError(UpdaterError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Runtime options for one update run."""

    kind: str = "npm"
    executables: dict[str, str] = field(default_factory=dict)
    command_timeout: float = DEFAULT_TIMEOUT
    command_attempts: int = 1
    retry_wait: float = 0.0
    fail_on_command_error: bool = False
    exclude_dirs: tuple[str, ...] = ()

    def executable_for(self, kind_id: str, default: str) -> str:
        """Return the configured executable for a kind, or ``default``."""
        return self.executables.get(kind_id, default)

    def with_overrides(self, **changes: Any) -> Settings:
        """Return a copy with the non-None keyword arguments applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a document that already passed schema validation."""
        defaults = cls()
        settings = cls(
            kind=data.get("kind", defaults.kind),
            executables=dict(data.get("executables", {})),
            command_timeout=float(data.get("commandTimeout", defaults.command_timeout)),
            command_attempts=int(data.get("commandAttempts", defaults.command_attempts)),
            retry_wait=float(data.get("retryWait", defaults.retry_wait)),
            fail_on_command_error=data.get("failOnCommandError", defaults.fail_on_command_error),
            exclude_dirs=tuple(data.get("excludeDirs", ())),
        )
        validate_kind(settings.kind)
        return settings


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_kind(kind_id: str) -> None:
    """Reject kind IDs that have no registered handler."""
    known = get_known_kinds()
    if kind_id not in known:
        raise ConfigError(f"Unknown manifest kind '{kind_id}'. Known kinds: {', '.join(known)}")


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. DEPENDENCY_UPDATER_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return Settings()

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError(f"Invalid configuration in {config_path}:\n{_format_errors(errors)}")

    return Settings.from_dict(data)
