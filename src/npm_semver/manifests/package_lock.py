"""Parse npm package-lock.json to capture installed top-level packages."""

from __future__ import annotations

from pathlib import Path

from . import read_json

_PREFIX = "node_modules/"


def parse(path: Path) -> list[tuple[str, str]]:
    """Return list of (package, version) for packages installed at the root.

    Supports npm v1 ("dependencies" tree) and v2+ ("packages" map). Nested
    copies (``node_modules/a/node_modules/b``) are not direct dependencies
    and are left out.
    """
    data = read_json(path)
    if not isinstance(data, dict):
        return []
    pairs: list[tuple[str, str]] = []

    # npm v2+ format
    packages = data.get("packages")
    if isinstance(packages, dict):
        for key, meta in packages.items():
            if not isinstance(meta, dict) or not key.startswith(_PREFIX):
                continue
            name = key[len(_PREFIX):]
            if _PREFIX.rstrip("/") in name.split("/"):
                continue
            version = meta.get("version")
            if version:
                pairs.append((name, str(version)))
        if pairs:
            return pairs

    # npm v1 format fallback
    deps = data.get("dependencies")
    if isinstance(deps, dict):
        for name, meta in deps.items():
            if isinstance(meta, dict) and "version" in meta:
                pairs.append((name, str(meta["version"])))

    return pairs
