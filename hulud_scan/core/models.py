"""Data model shared by the locator, scanners and reporter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple

MANIFEST_NAME = "package.json"
INSTALL_DIR_NAME = "node_modules"


class Stage(str, Enum):
    """Detection pass that produced a finding."""

    DIRECT = "direct"
    TRANSITIVE = "transitive"
    LOCKFILE = "lockfile"
    HEURISTIC_MARKER = "heuristic-marker"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SignatureSet:
    """Compromised package identifiers loaded for one run."""

    packages: Tuple[str, ...]
    source: Path | None = None

    def __len__(self) -> int:
        return len(self.packages)

    def __iter__(self):
        return iter(self.packages)


@dataclass(frozen=True)
class Finding:
    """One match between a scanned source and a suspicious identifier."""

    package: str
    stage: Stage
    source: Path

    def as_dict(self) -> Dict[str, str]:
        return {
            "package": self.package,
            "stage": self.stage.value,
            "source": str(self.source),
        }


@dataclass
class Project:
    """A directory holding a ``package.json`` and its scan results."""

    root: Path
    findings: List[Finding] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def manifest(self) -> Path:
        return self.root / MANIFEST_NAME

    @property
    def install_dir(self) -> Path:
        return self.root / INSTALL_DIR_NAME

    @property
    def finding_count(self) -> int:
        return len(self.findings)

    @property
    def is_clean(self) -> bool:
        return not self.findings

    def findings_for(self, stage: Stage) -> List[Finding]:
        return [finding for finding in self.findings if finding.stage is stage]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "clean": self.is_clean,
            "findings": [finding.as_dict() for finding in self.findings],
            "excluded": list(self.excluded),
            "warnings": list(self.warnings),
        }


@dataclass
class ScanReport:
    """Run-level verdict over every discovered project."""

    projects: List[Project]
    signature_count: int = 0

    @property
    def projects_scanned(self) -> int:
        return len(self.projects)

    @property
    def flagged(self) -> List[Project]:
        return [project for project in self.projects if not project.is_clean]

    @property
    def projects_flagged(self) -> int:
        return len(self.flagged)

    @property
    def is_clean(self) -> bool:
        return all(project.is_clean for project in self.projects)

    @property
    def exit_code(self) -> int:
        return 0 if self.is_clean else 1

    def as_dict(self) -> Dict[str, Any]:
        return {
            "status": "clean" if self.is_clean else "compromised",
            "signature_count": self.signature_count,
            "projects_scanned": self.projects_scanned,
            "projects_flagged": self.projects_flagged,
            "projects": [project.as_dict() for project in self.projects],
        }


__all__ = [
    "INSTALL_DIR_NAME",
    "MANIFEST_NAME",
    "Finding",
    "Project",
    "ScanReport",
    "SignatureSet",
    "Stage",
]
