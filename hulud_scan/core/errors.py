"""Fatal error taxonomy for the scanner.

Every exception here aborts the run before project-level work begins. Problems
with individual project files are never raised; scanners record them as
warnings on the owning :class:`~hulud_scan.core.models.Project` instead.
"""

from __future__ import annotations


class ScanError(RuntimeError):
    """Base class for errors that terminate a scan."""


class ConfigurationError(ScanError):
    """Raised when the signature file or configuration cannot be loaded."""


class InvalidInput(ScanError):
    """Raised when the scan root is missing or not a directory."""


class NoProjectsFound(ScanError):
    """Raised when no manifest exists outside installed dependency trees."""


__all__ = ["ConfigurationError", "InvalidInput", "NoProjectsFound", "ScanError"]
