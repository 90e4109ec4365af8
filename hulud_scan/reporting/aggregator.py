"""Merge per-project findings into the run verdict."""

from __future__ import annotations

from typing import Sequence

from ..core.models import Project, ScanReport, SignatureSet


def aggregate(projects: Sequence[Project], signatures: SignatureSet) -> ScanReport:
    """Build the run report.

    Findings are kept exactly as produced. The same identifier found by two
    passes stays two findings since each pass is an independent signal.
    """

    return ScanReport(projects=list(projects), signature_count=len(signatures))


__all__ = ["aggregate"]
