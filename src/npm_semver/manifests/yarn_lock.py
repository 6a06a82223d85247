"""Parse yarn.lock (classic and berry) to capture resolved packages."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from . import ManifestError


def _split_descriptor(descriptor: str) -> tuple[str, str]:
    """Split ``name@range`` (or berry ``name@npm:range``) into name and range."""
    descriptor = descriptor.strip().strip('"')
    idx = descriptor.find("@", 1) if descriptor.startswith("@") else descriptor.find("@")
    if idx == -1:
        return descriptor, ""
    return descriptor[:idx], descriptor[idx + 1:]


def _requested(descriptor: str, wanted: set[tuple[str, str]]) -> bool:
    name, spec = _split_descriptor(descriptor)
    return (name, spec) in wanted or (name, spec.removeprefix("npm:")) in wanted


def parse(path: Path, declared: Iterable[tuple[str, str]] | None = None) -> list[tuple[str, str]]:
    """Return list of (package, version) from yarn lock file.

    With ``declared`` (package, range) pairs, only entries whose header lists
    one of those exact descriptors are returned, so copies pulled in by other
    packages never stand in for a direct dependency.
    """
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise ManifestError(f"Failed to read {path}: {exc}") from exc
    wanted = None if declared is None else set(declared)
    pairs: list[tuple[str, str]] = []

    current_name: str | None = None
    for raw in lines:
        line = raw.rstrip()
        if not line or line.lstrip().startswith("#"):
            current_name = None
            continue
        if not line.startswith(" ") and line.endswith(":"):
            # classic joins descriptors with ", " outside quotes; berry quotes them together
            descriptors = [d for d in line[:-1].replace('"', "").split(",") if d.strip()]
            current_name = _split_descriptor(descriptors[0])[0] if descriptors else None
            if current_name == "__metadata":
                current_name = None
            elif wanted is not None and not any(_requested(d, wanted) for d in descriptors):
                current_name = None
            continue

        stripped = line.strip()
        if current_name and (stripped.startswith("version ") or stripped.startswith("version:")):
            version = stripped[len("version"):].lstrip(":").strip().strip('"')
            pairs.append((current_name, version))
            current_name = None

    return pairs
