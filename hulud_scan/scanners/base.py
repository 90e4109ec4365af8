#!/usr/bin/env python3
"""Scanner base class shared by the four detection passes."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.models import Finding, Project, SignatureSet, Stage
from ..core.signatures import ALLOWLIST
from ..utils import io as io_utils


class Scanner(ABC):
    """
    Base class for all detection passes

    Subclasses must implement:
    - stage attribute
    - description property
    - scan method
    """

    stage: Stage

    def __init__(
        self,
        signatures: SignatureSet,
        allowlist: Sequence[str] = ALLOWLIST,
        strict: bool = False,
    ):
        """
        Initialize scanner

        Args:
            signatures: Compromised package identifiers
            allowlist: Heuristic allowlist entries
            strict: Use structured parsing instead of text matching
        """
        self.signatures = signatures
        self.allowlist = tuple(allowlist)
        self.strict = strict
        self.logger = logging.getLogger(f"hulud_scan.scanners.{self.name}")

    @property
    def name(self) -> str:
        """Scanner name"""
        return self.stage.value

    @property
    @abstractmethod
    def description(self) -> str:
        """Human readable pass description"""

    @abstractmethod
    def scan(self, project: Project) -> List[Finding]:
        """
        Run the detection pass against one project

        Args:
            project: Project to scan

        Returns:
            Findings produced by this pass (possibly empty)
        """

    def execute(self, project: Project) -> List[Finding]:
        """
        Run the pass and record its findings on ``project``

        This method should not be overridden. Override scan() instead.
        """
        self.logger.debug("Scanning %s: %s", project.root, self.description)
        findings = self.scan(project)
        project.findings.extend(findings)
        return findings

    def finding(self, package: str, source: Path) -> Finding:
        return Finding(package=package, stage=self.stage, source=source)

    def warn(self, project: Project, message: str) -> None:
        """Record a non-fatal problem on the project and log it."""
        project.warnings.append(message)
        self.logger.warning(message)

    def is_file(self, project: Project, path: Path) -> Optional[bool]:
        """Return whether ``path`` is a file, ``None`` when it cannot be checked."""
        try:
            return path.is_file()
        except OSError as exc:
            self.warn(project, f"Cannot access {path}: {exc.strerror or exc}")
            return None

    def is_dir(self, project: Project, path: Path) -> Optional[bool]:
        """Return whether ``path`` is a directory, ``None`` when it cannot be checked."""
        try:
            return path.is_dir()
        except OSError as exc:
            self.warn(project, f"Cannot access {path}: {exc.strerror or exc}")
            return None

    def read_text(self, project: Project, path: Path) -> Optional[str]:
        """Read ``path`` or record it as unreadable and return ``None``."""
        try:
            return io_utils.read_text(path)
        except OSError as exc:
            self.warn(project, f"Cannot read {path}: {exc.strerror or exc}")
            return None

    def read_bytes(self, project: Project, path: Path) -> Optional[bytes]:
        try:
            return io_utils.read_bytes(path)
        except OSError as exc:
            self.warn(project, f"Cannot read {path}: {exc.strerror or exc}")
            return None


__all__ = ["Scanner"]
