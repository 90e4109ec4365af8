"""Text and JSON renderers for scan results."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Sequence

import click

from ..core.models import Project, ScanReport, Stage

RULE = "=" * 60

STAGE_TITLES = {
    Stage.DIRECT: "direct dependencies (package.json)",
    Stage.TRANSITIVE: "node_modules (transitive)",
    Stage.LOCKFILE: "lockfiles",
    Stage.HEURISTIC_MARKER: "SHA1-HULUD markers",
}

STAGE_CLEAN = {
    Stage.DIRECT: "No compromised packages in direct dependencies",
    Stage.TRANSITIVE: "No compromised packages installed",
    Stage.LOCKFILE: "No compromised packages in lockfiles",
    Stage.HEURISTIC_MARKER: "No SHA1-HULUD markers detected",
}


def _json_default(value: Any) -> Any:
    """Return a JSON compatible representation for complex objects."""

    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Stage):
        return value.value
    return value


def _style(text: str, color: bool, **styles: Any) -> str:
    return click.style(text, **styles) if color else text


def render_project_list(projects: Sequence[Project]) -> List[str]:
    lines = [f"Found {len(projects)} project(s):"]
    lines.extend(f"  * {project.root}" for project in projects)
    return lines


def render_project(project: Project, color: bool = True) -> List[str]:
    """Render the per-stage findings and verdict of one project."""

    lines = ["", RULE, f"SCANNING PROJECT: {project.root}", RULE]
    stages = list(Stage)

    for index, stage in enumerate(stages, start=1):
        lines.append(f"[{index}/{len(stages)}] {STAGE_TITLES[stage]}")
        findings = project.findings_for(stage)
        for finding in findings:
            if stage is Stage.HEURISTIC_MARKER:
                detail = f"  SUSPICIOUS: {finding.package} ({finding.source.name})"
            else:
                detail = f"  FOUND: {finding.package} in {finding.source}"
            lines.append(_style(detail, color, fg="red"))
        if findings:
            continue
        message = STAGE_CLEAN[stage]
        if stage is Stage.HEURISTIC_MARKER and project.excluded:
            message = (
                f"No suspicious SHA1 markers "
                f"({len(project.excluded)} legitimate packages excluded)"
            )
        lines.append(_style(f"  OK: {message}", color, fg="green"))

    if project.warnings:
        lines.append("Warnings:")
        lines.extend(
            _style(f"  - {warning}", color, fg="yellow") for warning in project.warnings
        )

    if project.is_clean:
        lines.append(_style(f"{project.root} is clean", color, fg="green", bold=True))
    else:
        lines.append(
            _style(
                f"{project.finding_count} issue(s) found in {project.root}",
                color,
                fg="red",
                bold=True,
            )
        )
        for finding in project.findings:
            lines.append(f"  - {finding.package} ({finding.stage.value})")
    return lines


def render_summary(report: ScanReport, color: bool = True) -> List[str]:
    verdict_color = "green" if report.is_clean else "red"
    return [
        "",
        "Scan complete",
        f"   * Signatures loaded: {report.signature_count}",
        f"   * Projects scanned: {report.projects_scanned}",
        _style(
            f"   * Projects with issues: {report.projects_flagged}",
            color,
            fg=verdict_color,
        ),
    ]


def render_json(report: ScanReport, indent: int | None = 2) -> str:
    return json.dumps(report.as_dict(), indent=indent, default=_json_default, sort_keys=True)


__all__ = [
    "STAGE_TITLES",
    "render_json",
    "render_project",
    "render_project_list",
    "render_summary",
]
