"""I/O helper utilities."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

# Printable ASCII plus tab, the character class ``strings(1)`` reports.
_PRINTABLE_CLASS = rb"[\x20-\x7e\t]"

DEFAULT_MIN_STRING_LENGTH = 4


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read text from ``path`` replacing undecodable bytes.

    Raises :class:`OSError` when the file cannot be read.
    """

    return path.read_bytes().decode(encoding, errors="replace")


def read_bytes(path: Path) -> bytes:
    """Read raw bytes from ``path``."""

    return path.read_bytes()


def extract_strings(data: bytes, min_length: int = DEFAULT_MIN_STRING_LENGTH) -> List[str]:
    """Return runs of printable characters found in ``data``.

    Mirrors ``strings(1)``: every run of at least ``min_length`` printable
    ASCII characters becomes one entry.
    """

    if min_length < 1:
        raise ValueError("min_length must be positive")

    pattern = re.compile(_PRINTABLE_CLASS + b"{%d,}" % min_length)
    return [match.decode("ascii") for match in pattern.findall(data)]


__all__ = ["DEFAULT_MIN_STRING_LENGTH", "extract_strings", "read_bytes", "read_text"]
