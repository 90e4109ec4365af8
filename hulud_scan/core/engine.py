"""Scan orchestration: discovery, detection passes and aggregation."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Type

from ..reporting.aggregator import aggregate
from ..scanners import SCANNERS, Scanner
from .config import ScanConfig
from .locator import ProjectLocator
from .logger import get_module_logger
from .models import Project, ScanReport, SignatureSet
from .signatures import SignatureStore, build_allowlist

ProjectCallback = Callable[[Project], None]

logger = get_module_logger("engine")


class ScanEngine:
    """Run every detection pass over every project below a root.

    Projects are processed one at a time; each pass appends to the project's
    own finding list, so nothing is shared between projects.
    """

    def __init__(
        self,
        signatures: SignatureSet,
        allowlist: Sequence[str] = (),
        strict: bool = False,
        locator: Optional[ProjectLocator] = None,
        scanner_classes: Sequence[Type[Scanner]] = SCANNERS,
    ):
        self.signatures = signatures
        self.allowlist = build_allowlist(allowlist)
        self.strict = strict
        self.locator = locator or ProjectLocator()
        self.scanners: List[Scanner] = [
            scanner_class(signatures, allowlist=self.allowlist, strict=strict)
            for scanner_class in scanner_classes
        ]

    @classmethod
    def from_config(cls, config: ScanConfig) -> "ScanEngine":
        signatures = SignatureStore.load(config.signature_file)
        return cls(signatures, allowlist=config.allowlist, strict=config.strict)

    def discover(self, root: Path) -> List[Project]:
        return self.locator.discover(root)

    def scan_project(self, project: Project) -> Project:
        logger.debug("Scanning project %s", project.root)
        for scanner in self.scanners:
            scanner.execute(project)
        if project.is_clean:
            logger.debug("%s is clean", project.root)
        else:
            logger.debug("%d issue(s) found in %s", project.finding_count, project.root)
        return project

    def scan_projects(
        self,
        projects: Sequence[Project],
        on_project: Optional[ProjectCallback] = None,
    ) -> ScanReport:
        for project in projects:
            self.scan_project(project)
            if on_project is not None:
                on_project(project)
        return aggregate(projects, self.signatures)

    def run(self, root: Path, on_project: Optional[ProjectCallback] = None) -> ScanReport:
        return self.scan_projects(self.discover(root), on_project=on_project)


def scan_path(
    root: Path,
    signature_file: Optional[Path] = None,
    allowlist: Sequence[str] = (),
    strict: bool = False,
) -> ScanReport:
    """Scan ``root`` with the signatures in ``signature_file``."""

    signatures = SignatureStore.load(signature_file)
    engine = ScanEngine(signatures, allowlist=allowlist, strict=strict)
    return engine.run(Path(root))


__all__ = ["ScanEngine", "scan_path"]
