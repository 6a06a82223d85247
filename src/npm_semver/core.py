"""Repository checking entrypoints.

Compares the version each lockfile records for a direct dependency with the
range declared for it in package.json. Nothing is resolved or fetched; the
lockfile is taken as the source of truth for what is installed.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .config import Settings, load_settings
from .discovery import discover_projects
from .errors import SemverSyntaxError
from .manifests import package_json
from .manifests.package_lock import parse as parse_package_lock
from .manifests.pnpm_lock import parse as parse_pnpm_lock
from .manifests.yarn_lock import parse as parse_yarn_lock
from .matchers import match
from .parser import parse_range, parse_version
from .report import aggregate
from .version import Version

logger = logging.getLogger(__name__)

LOCKFILE_READERS: dict[str, Callable[[Path], list[tuple[str, str]]]] = {
    "package-lock.json": parse_package_lock,
    "yarn.lock": parse_yarn_lock,
    "pnpm-lock.yaml": parse_pnpm_lock,
}


def check_repository(
    root: Path,
    settings: Settings | None = None,
    config_path: Path | str | None = None,
) -> dict[str, Any]:
    """Check every package.json project under root.

    Params:
        root: repository root to check
        settings: checker settings; loaded via :func:`load_settings` when None
        config_path: explicit settings file, ignored when settings is given

    Returns: report dict as built by :func:`npm_semver.report.aggregate`
    """
    root = root.resolve()
    if settings is None:
        settings = load_settings(root, config_path)

    projects = [
        check_project(project, root, settings)
        for project in discover_projects(root, settings.exclude)
    ]
    logger.info("Checked %d project(s) under %s", len(projects), root)
    return aggregate(projects)


def _load_installed(
    project: Path,
    lockfiles: tuple[str, ...],
    declared: list[tuple[str, str]],
) -> tuple[str | None, dict[str, list[str]]]:
    for name in lockfiles:
        lock = project / name
        if not lock.is_file():
            continue
        if name == "yarn.lock":
            # yarn keys entries by descriptor, not by install location
            pairs = parse_yarn_lock(lock, declared)
        else:
            pairs = LOCKFILE_READERS[name](lock)
        installed: dict[str, list[str]] = defaultdict(list)
        for package, version in pairs:
            if version not in installed[package]:
                installed[package].append(version)
        return name, dict(installed)
    return None, {}


def _parse_installed(package: str, versions: list[str]) -> list[Version]:
    parsed: list[Version] = []
    for text in versions:
        try:
            parsed.append(parse_version(text))
        except SemverSyntaxError:
            logger.debug("Ignoring non-semver installed version %s@%s", package, text)
    return parsed


def check_project(project: Path, root: Path, settings: Settings) -> dict[str, Any]:
    declared = package_json.parse(project / "package.json", settings.sections)
    lockfile, installed = _load_installed(project, settings.lockfiles, declared)
    path = project.relative_to(root).as_posix()
    result: dict[str, Any] = {
        "path": "" if path == "." else path,
        "lockfile": lockfile,
        "findings": [],
        "checked": 0,
        "skipped": 0,
    }

    if lockfile is None:
        logger.info("No lockfile in %s; skipping %d declared range(s)", project, len(declared))
        result["skipped"] = len(declared)
        return result

    for name, expr in declared:
        try:
            matcher = parse_range(expr)
        except SemverSyntaxError as exc:
            logger.debug("Skipping %s: %r is not a semver range (%s)", name, expr, exc)
            result["skipped"] += 1
            continue

        versions = installed.get(name, [])
        if not versions:
            if settings.fail_on_missing:
                result["findings"].append(
                    {"package": name, "declared": expr, "installed": [], "status": "missing"}
                )
            else:
                result["skipped"] += 1
            continue

        parsed = _parse_installed(name, versions)
        if not parsed:
            result["skipped"] += 1
            continue

        result["checked"] += 1
        if not any(match(matcher, version) for version in parsed):
            result["findings"].append(
                {"package": name, "declared": expr, "installed": versions, "status": "mismatch"}
            )

    return result
