"""Parse pnpm-lock.yaml to capture directly installed packages."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml

from . import ManifestError

_V5_VERSION = re.compile(r"\d+\.\d+\.\d+(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?")
_SECTIONS = ("dependencies", "devDependencies", "optionalDependencies")


def _strip_peers(version: str) -> str:
    # "1.2.3(react@18.0.0)" (v6+) or "1.2.3_react@18.0.0" (v5)
    return version.split("(", 1)[0].split("_", 1)[0]


def _split_key(key: str) -> tuple[str, str] | None:
    # "/name@1.2.3", "/@scope/name@1.2.3(peer@1.0.0)", "name@1.2.3",
    # "/name/1.2.3" or "/@scope/name/1.2.3_peer@1.0.0"
    ref = key.split("(", 1)[0].lstrip("/")
    name, _, last = ref.rpartition("/")
    version = _strip_peers(last)
    if name and _V5_VERSION.fullmatch(version):
        return name, version
    at = ref.rfind("@")
    if at > 0:
        return ref[:at], ref[at + 1:]
    return None


def _direct(importer: dict[str, Any]) -> list[tuple[str, str]] | None:
    """Versions an importer pins for its own dependencies; None when it lists none."""
    found = False
    pairs: list[tuple[str, str]] = []
    for section in _SECTIONS:
        deps = importer.get(section)
        if not isinstance(deps, dict):
            continue
        found = True
        for name, entry in deps.items():
            # v6+ stores {specifier, version}; v5 stores the version string
            version = entry.get("version") if isinstance(entry, dict) else entry
            if version is not None:
                pairs.append((str(name), _strip_peers(str(version))))
    return pairs if found else None


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) installed for the project root.

    Reads ``importers['.']`` (v6 workspaces, v9) or the top-level dependency
    sections (v5, v6). Lockfiles carrying neither fall back to every entry
    under ``packages``.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a YAML mapping")

    importers = data.get("importers")
    root = importers.get(".") if isinstance(importers, dict) else data
    if isinstance(root, dict):
        pairs = _direct(root)
        if pairs is not None:
            return pairs

    pairs = []
    for key in (data.get("packages") or {}).keys():
        if not isinstance(key, str):
            continue
        split = _split_key(key)
        if split is not None:
            pairs.append(split)
    return pairs
