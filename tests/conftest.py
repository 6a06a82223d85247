"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from npm_semver.config import CONFIG_PATH_ENV_VAR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings and exit-code overrides from the developer's shell out of tests."""
    monkeypatch.delenv(CONFIG_PATH_ENV_VAR, raising=False)
    monkeypatch.delenv("NPM_SEMVER_WARN_ONLY", raising=False)
    monkeypatch.delenv("NPM_SEMVER_LOG_LEVEL", raising=False)


@pytest.fixture
def write_json():
    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def npm_project(tmp_path, write_json):
    """A root project with a package-lock.json holding one out-of-range package."""
    write_json(
        tmp_path / "package.json",
        {
            "name": "demo",
            "dependencies": {
                "left-pad": "^1.2.0",
                "lodash": "~4.17.0",
                "local-lib": "file:../local-lib",
                "react": "^18.0.0",
            },
            "devDependencies": {"jest": "29.x"},
        },
    )
    write_json(
        tmp_path / "package-lock.json",
        {
            "lockfileVersion": 3,
            "packages": {
                "": {"name": "demo"},
                "node_modules/left-pad": {"version": "1.3.0"},
                "node_modules/lodash": {"version": "4.18.1"},
                "node_modules/jest": {"version": "29.7.0"},
                "node_modules/left-pad/node_modules/lodash": {"version": "4.17.5"},
            },
        },
    )
    return tmp_path
