"""Installed dependency pass over ``node_modules``."""

from __future__ import annotations

from pathlib import Path
from typing import List, Set

from ..core.models import Finding, Project, Stage
from .base import Scanner


def install_path(install_dir: Path, package: str) -> Path:
    """Return where ``package`` is installed below ``install_dir``.

    Scoped identifiers live two levels deep (``@scope/name``), unscoped ones
    directly below the install directory.
    """

    if package.startswith("@") and "/" in package:
        scope, name = package.split("/", 1)
        return install_dir / scope / name
    return install_dir / package


class InstalledTreeScanner(Scanner):
    """Check the top level of ``node_modules`` for compromised packages.

    Only the flattened top level is inspected. A copy nested inside another
    package's private ``node_modules`` is not found.
    """

    stage = Stage.TRANSITIVE

    @property
    def description(self) -> str:
        return "installed packages (node_modules)"

    def scan(self, project: Project) -> List[Finding]:
        install_dir = project.install_dir
        present = self.is_dir(project, install_dir)
        if present is None:
            return []
        if not present:
            self.warn(
                project,
                f"{install_dir.name} not found in {project.root} (run 'npm install' first)",
            )
            return []

        findings: List[Finding] = []
        seen: Set[str] = set()
        for package in self.signatures:
            if package in seen:
                continue
            location = install_path(install_dir, package)
            if self.is_dir(project, location):
                seen.add(package)
                findings.append(self.finding(package, location))
        return findings


__all__ = ["InstalledTreeScanner", "install_path"]
