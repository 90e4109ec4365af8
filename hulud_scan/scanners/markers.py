"""Heuristic pass for package names carrying the ``sha1`` marker.

The signature list cannot be exhaustive, and the campaign names its packages
with the ``sha1`` token. Any such token found in a lockfile is suspicious
unless it is a longer hash-algorithm name or an allowlisted package.
"""

from __future__ import annotations

import re
from typing import List

from ..core.models import Finding, Project, Stage
from ..core.signatures import is_allowlisted
from .lockfile import LockfilePass

HASH_NAME_EXCLUSIONS = ("sha512", "sha256")

# ``"integrity": "sha1-<base64>"`` entries of older npm lockfiles.
RE_SHA1_INTEGRITY = re.compile(r"^sha1-[A-Za-z0-9+/]{27}=$")


def is_hash_name(token: str) -> bool:
    return any(name in token for name in HASH_NAME_EXCLUSIONS)


class MarkerHeuristicScanner(LockfilePass):
    """Flag marker-bearing identifiers that are not allowlisted.

    Allowlisted tokens are not findings; they are recorded on
    :attr:`Project.excluded` for the summary.
    """

    stage = Stage.HEURISTIC_MARKER

    @property
    def description(self) -> str:
        return "sha1 markers"

    def scan(self, project: Project) -> List[Finding]:
        findings: List[Finding] = []
        for fmt, path, content in self.iter_lockfiles(project):
            for token in fmt.extract_candidates(content):
                if is_hash_name(token) or RE_SHA1_INTEGRITY.match(token):
                    continue
                if is_allowlisted(token, self.allowlist):
                    self.logger.debug("%s in %s is allowlisted", token, path.name)
                    project.excluded.append(token)
                    continue
                findings.append(self.finding(token, path))
        return findings


__all__ = ["HASH_NAME_EXCLUSIONS", "MarkerHeuristicScanner", "is_hash_name"]
