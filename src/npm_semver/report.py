"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any


def aggregate(projects: list[dict[str, Any]]) -> dict[str, Any]:
    """Aggregate per-project results into a single report.

    Each project dict carries ``path``, ``lockfile``, ``findings`` and the
    ``checked``/``skipped`` counters produced by the checker.
    """

    total_findings = sum(len(p.get("findings", [])) for p in projects)

    report: dict[str, Any] = {
        "version": "1",
        "hasFindings": total_findings > 0,
        "projects": projects,
        "totals": {
            "projects": len(projects),
            "findings": total_findings,
            "checked": sum(p.get("checked", 0) for p in projects),
            "skipped": sum(p.get("skipped", 0) for p in projects),
        },
    }

    return report
