"""Human-readable Markdown rendering of a check report."""

from __future__ import annotations

from typing import Any


def render_summary(report: dict[str, Any]) -> str:
    """Return a Markdown string with totals and a table of unsatisfied ranges."""
    totals = report.get("totals", {})
    projects = report.get("projects", [])

    lines = []
    lines.append("# npm-semver Summary")
    lines.append("")
    lines.append(
        f"Total projects: {totals.get('projects', 0)} | Checked: {totals.get('checked', 0)}"
        f" | Skipped: {totals.get('skipped', 0)} | Findings: {totals.get('findings', 0)}"
    )
    lines.append("")
    lines.append("| Project | Package | Declared | Installed | Status |")
    lines.append("| --- | --- | --- | --- | --- |")

    has_rows = False

    for proj in projects:
        path = proj.get("path") or "(root)"
        findings = proj.get("findings") or []
        if not findings:
            lines.append(f"| {path} | All ranges satisfied | n/a | n/a | ok |")
            has_rows = True
            continue

        for finding in findings:
            installed = ",".join(finding.get("installed", []) or []) or "n/a"
            lines.append(
                f"| {path} | {finding.get('package', '')} | `{finding.get('declared', '')}`"
                f" | {installed} | {finding.get('status', '')} |"
            )
            has_rows = True

    if not has_rows:
        lines.append("| (no projects checked) | n/a | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"
