"""Lockfile pass over every lockfile present in a project."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, List, Sequence, Set, Tuple

from ..core.models import Finding, Project, Stage
from .base import Scanner
from .formats import LOCKFILE_FORMATS, LockfileFormat


class LockfilePass(Scanner):
    """Shared lockfile discovery for passes that read lockfiles."""

    formats: Sequence[LockfileFormat] = LOCKFILE_FORMATS

    def iter_lockfiles(self, project: Project) -> Iterator[Tuple[LockfileFormat, Path, str]]:
        """Yield ``(format, path, decoded content)`` for each readable lockfile."""

        for fmt in self.formats:
            path = project.root / fmt.filename
            present = self.is_file(project, path)
            if not present:
                if present is False:
                    self.logger.debug("%s not present in %s", fmt.filename, project.root)
                continue
            raw = self.read_bytes(project, path)
            if raw is None:
                continue
            yield fmt, path, fmt.decode(raw)


class LockfileScanner(LockfilePass):
    """Match compromised identifiers against each lockfile independently.

    Findings are per ``(identifier, lockfile)``: an identifier present in two
    lockfiles is reported twice since each file is remediated on its own.
    """

    stage = Stage.LOCKFILE

    @property
    def description(self) -> str:
        return "lockfiles"

    def scan(self, project: Project) -> List[Finding]:
        findings: List[Finding] = []
        for fmt, path, content in self.iter_lockfiles(project):
            self.logger.info("Scanning %s", path)
            findings.extend(self._scan_lockfile(project, fmt, path, content))
        return findings

    def _scan_lockfile(
        self, project: Project, fmt: LockfileFormat, path: Path, content: str
    ) -> List[Finding]:
        declared = None
        if self.strict:
            try:
                declared = fmt.parse_packages(content)
            except ValueError as exc:
                self.warn(project, f"Cannot parse {path}: {exc}")
                return []

        findings: List[Finding] = []
        seen: Set[str] = set()
        for package in self.signatures:
            if package in seen:
                continue
            if declared is not None:
                matched = package in declared
            else:
                matched = fmt.matches(package, content)
            if matched:
                seen.add(package)
                findings.append(self.finding(package, path))
        return findings


__all__ = ["LockfilePass", "LockfileScanner"]
