"""Sha1-Hulud npm supply-chain compromise scanner."""

from importlib.metadata import PackageNotFoundError, version

from .core.engine import ScanEngine, scan_path
from .core.errors import (
    ConfigurationError,
    InvalidInput,
    NoProjectsFound,
    ScanError,
)
from .core.locator import ProjectLocator
from .core.models import Finding, Project, ScanReport, SignatureSet, Stage
from .core.signatures import ALLOWLIST, SignatureStore

__all__ = [
    "__version__",
    "ALLOWLIST",
    "ConfigurationError",
    "Finding",
    "InvalidInput",
    "NoProjectsFound",
    "Project",
    "ProjectLocator",
    "ScanEngine",
    "ScanError",
    "ScanReport",
    "SignatureSet",
    "SignatureStore",
    "Stage",
    "scan_path",
]

try:  # pragma: no cover - depends on package metadata
    __version__ = version("hulud-scan")
except PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "1.0.0-dev"
