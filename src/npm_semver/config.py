"""Settings loader for the repository checker.

Reads checker settings from a JSON file and validates them against
``SETTINGS_SCHEMA``. Every key is optional; missing keys fall back to the
npm defaults.
"""

from __future__ import annotations

import json
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .discovery import DEFAULT_EXCLUDES
from .manifests.package_json import DEFAULT_SECTIONS

DEFAULT_CONFIG_NAME = "npm-semver.json"
CONFIG_PATH_ENV_VAR = "NPM_SEMVER_CONFIG"
DEFAULT_LOCKFILES = ("package-lock.json", "yarn.lock", "pnpm-lock.yaml")

_STRING_LIST = {"type": "array", "items": {"type": "string", "minLength": 1}, "uniqueItems": True}

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "sections": _STRING_LIST,
        "exclude": _STRING_LIST,
        "lockfiles": {
            **_STRING_LIST,
            "items": {"enum": list(DEFAULT_LOCKFILES)},
            "minItems": 1,
        },
        "failOnMissing": {"type": "boolean"},
    },
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Checker settings."""

    sections: tuple[str, ...] = DEFAULT_SECTIONS
    exclude: tuple[str, ...] = DEFAULT_EXCLUDES
    lockfiles: tuple[str, ...] = DEFAULT_LOCKFILES
    fail_on_missing: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        defaults = cls()
        return cls(
            sections=tuple(data.get("sections", defaults.sections)),
            exclude=tuple(data.get("exclude", defaults.exclude)),
            lockfiles=tuple(data.get("lockfiles", defaults.lockfiles)),
            fail_on_missing=data.get("failOnMissing", defaults.fail_on_missing),
        )


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def _resolve_config_path(root: Path, path: Path | str | None) -> tuple[Path, bool]:
    """Resolve the configuration file path and whether it must exist.

    Priority:
    1. Explicit path argument
    2. NPM_SEMVER_CONFIG environment variable
    3. npm-semver.json in the checked root (optional)
    """
    if path is not None:
        return Path(path), True

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path), True

    return root / DEFAULT_CONFIG_NAME, False


def validate_settings(data: Any) -> None:
    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errors:
        raise ConfigError("Invalid configuration:\n" + _format_errors(errors))


def load_settings(root: Path | str = ".", path: Path | str | None = None) -> Settings:
    """Load and validate checker settings.

    Args:
        root: Directory being checked; its npm-semver.json is used when no
            explicit path or env var is given.
        path: Optional explicit config file path.

    Raises:
        ConfigError: If a required file is missing or contains invalid data.
    """
    config_path, required = _resolve_config_path(Path(root), path)

    if not config_path.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_path}")
        return Settings()

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    validate_settings(data)
    return Settings.from_dict(data)
