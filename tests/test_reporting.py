"""Tests for report rendering."""

from __future__ import annotations

import json
from pathlib import Path

from hulud_scan.core.models import Finding, Project, ScanReport, Stage
from hulud_scan.reporting.render import render_json, render_project, render_summary


def _project(tmp_path: Path) -> Project:
    project = Project(root=tmp_path / "app")
    project.findings.extend(
        [
            Finding("evil-pkg", Stage.DIRECT, tmp_path / "app" / "package.json"),
            Finding("evil-pkg", Stage.LOCKFILE, tmp_path / "app" / "yarn.lock"),
        ]
    )
    project.warnings.append("node_modules not found")
    return project


def test_render_project_lists_each_stage(tmp_path: Path) -> None:
    lines = render_project(_project(tmp_path), color=False)
    text = "\n".join(lines)

    assert "[1/4] direct dependencies (package.json)" in text
    assert "[4/4] SHA1-HULUD markers" in text
    assert "OK: No compromised packages installed" in text
    assert "  - evil-pkg (direct)" in text
    assert "  - evil-pkg (lockfile)" in text
    assert "2 issue(s) found" in text
    assert "  - node_modules not found" in text


def test_render_project_clean(tmp_path: Path) -> None:
    lines = render_project(Project(root=tmp_path), color=False)

    assert lines[-1] == f"{tmp_path} is clean"


def test_render_summary_counts(tmp_path: Path) -> None:
    report = ScanReport(projects=[_project(tmp_path), Project(root=tmp_path)], signature_count=5)

    lines = render_summary(report, color=False)

    assert "   * Projects scanned: 2" in lines
    assert "   * Projects with issues: 1" in lines
    assert "   * Signatures loaded: 5" in lines


def test_render_json_is_deterministic(tmp_path: Path) -> None:
    report = ScanReport(projects=[_project(tmp_path)], signature_count=1)

    payload = json.loads(render_json(report))

    assert payload["projects_flagged"] == 1
    assert payload["projects"][0]["findings"][1] == {
        "package": "evil-pkg",
        "stage": "lockfile",
        "source": str(tmp_path / "app" / "yarn.lock"),
    }
    assert render_json(report) == render_json(report)
