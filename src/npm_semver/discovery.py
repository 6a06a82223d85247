"""Project discovery utilities."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

DEFAULT_EXCLUDES = ("node_modules", ".git", ".venv")


def discover_projects(root: Path, excludes: Iterable[str] = DEFAULT_EXCLUDES) -> list[Path]:
    """Find directories holding a package.json under root, skipping vendor dirs.

    The result is sorted so reports come out in a stable order.
    """
    root = root.resolve()
    skip = set(excludes)
    found: list[Path] = []

    for path in root.rglob("package.json"):
        if not path.is_file():
            continue
        if any(part in skip for part in path.relative_to(root).parts):
            continue
        found.append(path.parent)

    return sorted(found)
