"""Detection passes, run per project in the order of :data:`SCANNERS`."""

from .base import Scanner
from .formats import (
    LOCKFILE_FORMATS,
    BunLockfile,
    LockfileFormat,
    NpmLockfile,
    PnpmLockfile,
    YarnLockfile,
)
from .installed import InstalledTreeScanner
from .lockfile import LockfileScanner
from .manifest import ManifestScanner
from .markers import MarkerHeuristicScanner

SCANNERS = (
    ManifestScanner,
    InstalledTreeScanner,
    LockfileScanner,
    MarkerHeuristicScanner,
)

__all__ = [
    "LOCKFILE_FORMATS",
    "SCANNERS",
    "BunLockfile",
    "InstalledTreeScanner",
    "LockfileFormat",
    "LockfileScanner",
    "ManifestScanner",
    "MarkerHeuristicScanner",
    "NpmLockfile",
    "PnpmLockfile",
    "Scanner",
    "YarnLockfile",
]
