"""Direct dependency pass over ``package.json``."""

from __future__ import annotations

import json
from typing import List, Optional, Set

from ..core.models import Finding, Project, Stage
from .base import Scanner

DEPENDENCY_SECTIONS = (
    "dependencies",
    "devDependencies",
    "optionalDependencies",
    "peerDependencies",
)


class ManifestScanner(Scanner):
    """Match compromised identifiers against the project manifest.

    The default mode looks for the quoted identifier anywhere in the file, so
    a name in an unrelated string field also matches. Strict mode only
    considers the keys of the dependency sections.
    """

    stage = Stage.DIRECT

    @property
    def description(self) -> str:
        return "direct dependencies (package.json)"

    def scan(self, project: Project) -> List[Finding]:
        manifest = project.manifest
        present = self.is_file(project, manifest)
        if present is None:
            return []
        if not present:
            self.warn(project, f"{manifest.name} not found in {project.root}")
            return []

        content = self.read_text(project, manifest)
        if content is None:
            return []

        declared = self._declared_dependencies(project, content) if self.strict else None
        if self.strict and declared is None:
            return []

        findings: List[Finding] = []
        seen: Set[str] = set()
        for package in self.signatures:
            if package in seen:
                continue
            if declared is not None:
                matched = package in declared
            else:
                matched = f'"{package}"' in content
            if matched:
                seen.add(package)
                findings.append(self.finding(package, manifest))
        return findings

    def _declared_dependencies(self, project: Project, content: str) -> Optional[Set[str]]:
        try:
            data = json.loads(content)
        except ValueError as exc:
            self.warn(project, f"Cannot parse {project.manifest}: {exc}")
            return None
        if not isinstance(data, dict):
            self.warn(project, f"Cannot parse {project.manifest}: root is not an object")
            return None

        names: Set[str] = set()
        for section in DEPENDENCY_SECTIONS:
            entries = data.get(section)
            if isinstance(entries, dict):
                names.update(entries)
        return names


__all__ = ["DEPENDENCY_SECTIONS", "ManifestScanner"]
