"""Compromised package signatures and the heuristic allowlist."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

from .errors import ConfigurationError
from .logger import get_module_logger
from .models import SignatureSet

DEFAULT_SIGNATURE_FILE = Path(__file__).resolve().parents[1] / "data" / "sha1-hulud-packages.txt"

# Legitimate packages that carry a hash-algorithm name. Matched as substrings
# of an extracted token so scoped and path-prefixed forms are covered too.
ALLOWLIST: tuple[str, ...] = (
    "@aws-crypto/sha1-browser",
    "@aws-crypto/sha256-browser",
    "@aws-crypto/sha256-js",
    "sha.js",
)

# Matched only against the whole token: as a substring it would cover every
# token the marker pass extracts.
ALLOWLIST_EXACT: tuple[str, ...] = ("sha1",)

logger = get_module_logger("signatures")


class SignatureStore:
    """Loads the compromised package list from a newline-delimited file.

    Lines starting with ``#`` are comments and empty lines are ignored. Every
    other line is taken verbatim as a package identifier; surrounding
    whitespace is *not* stripped and duplicates are kept.
    """

    @staticmethod
    def default_path() -> Path:
        return DEFAULT_SIGNATURE_FILE

    @classmethod
    def load(cls, path: Optional[Path] = None) -> SignatureSet:
        path = Path(path) if path else cls.default_path()

        if not path.is_file():
            raise ConfigurationError(f"Package file not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Cannot read package file {path}: {exc}") from exc

        packages = tuple(cls.parse_lines(text.split("\n")))
        logger.debug("Loaded %d compromised package signatures from %s", len(packages), path)
        return SignatureSet(packages=packages, source=path)

    @staticmethod
    def parse_lines(lines: Iterable[str]) -> Iterable[str]:
        for line in lines:
            if line.endswith("\r"):
                line = line[:-1]
            if not line or line.startswith("#"):
                continue
            yield line


def build_allowlist(extra: Sequence[str] = ()) -> tuple[str, ...]:
    """Return the compiled-in allowlist extended by configured entries."""

    merged = list(ALLOWLIST)
    for entry in extra:
        if entry and entry not in merged:
            merged.append(entry)
    return tuple(merged)


def is_allowlisted(token: str, allowlist: Sequence[str] = ALLOWLIST) -> bool:
    if token in ALLOWLIST_EXACT:
        return True
    return any(entry in token for entry in allowlist)


__all__ = [
    "ALLOWLIST",
    "ALLOWLIST_EXACT",
    "DEFAULT_SIGNATURE_FILE",
    "SignatureStore",
    "build_allowlist",
    "is_allowlisted",
]
