"""Parse package.json and extract declared ranges across sections."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from . import ManifestError, read_json

DEFAULT_SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def parse(path: Path, sections: Iterable[str] = DEFAULT_SECTIONS) -> list[tuple[str, str]]:
    """Return list of (package, range_expr) from the given dependency sections.

    A package listed in several sections is reported once per section.
    """
    data = read_json(path)
    if not isinstance(data, dict):
        raise ManifestError(f"{path} must contain a JSON object")

    pairs: list[tuple[str, str]] = []
    for section in sections:
        deps = data.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for name, expr in deps.items():
            pairs.append((name, str(expr)))

    return pairs
