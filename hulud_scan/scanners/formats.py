"""Lockfile format variants.

Each supported lockfile gets one :class:`LockfileFormat` subclass that knows
how to decode the raw file, match a compromised identifier against the
decoded content, and pull out candidate identifiers containing the marker
token. Matching is textual on purpose: partial or newer-format lockfiles are
still scanned. :meth:`LockfileFormat.parse_packages` backs the opt-in strict
mode with a structured parse where one is available.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Set

import yaml

from ..utils.io import extract_strings

MARKER = "sha1"

RE_QUOTED = re.compile(r'"([^"\n]*)"')
RE_SINGLE_QUOTED = re.compile(r"'([^'\n]*)'")
RE_BUN_TOKEN = re.compile(r"@[a-zA-Z0-9_/-]+sha1[a-zA-Z0-9_-]*|sha1[a-zA-Z0-9_-]+")


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Return the mapping stored under ``key``, empty when absent."""

    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{key!r} must be a mapping, got {type(value).__name__}")
    return value


def _unique(tokens: Iterable[str]) -> List[str]:
    return sorted({token for token in tokens if token})


def _split_specifier(specifier: str) -> str:
    """Return the package name of ``name@range`` or ``@scope/name@range``."""

    specifier = specifier.strip().strip("\"'")
    at = specifier.find("@", 1)
    return specifier[:at] if at > 0 else specifier


class LockfileFormat(ABC):
    """Base class for lockfile format handlers."""

    filename: str = ""

    def decode(self, raw: bytes) -> str:
        return raw.decode("utf-8", errors="replace")

    def matches(self, identifier: str, content: str) -> bool:
        return identifier in content

    @abstractmethod
    def extract_candidates(self, content: str) -> List[str]:
        """Return distinct tokens in ``content`` containing the marker."""

    def parse_packages(self, content: str) -> Optional[Set[str]]:
        """Return package names from a structured parse.

        ``None`` means the format has no structured parser and textual
        matching applies. Raises :class:`ValueError` on malformed content.
        """

        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.filename!r})"


class NpmLockfile(LockfileFormat):
    filename = "package-lock.json"

    def extract_candidates(self, content: str) -> List[str]:
        return _unique(token for token in RE_QUOTED.findall(content) if MARKER in token)

    def parse_packages(self, content: str) -> Optional[Set[str]]:
        data = json.loads(content)
        if not isinstance(data, dict):
            raise ValueError("lockfile root must be an object")

        names: Set[str] = set()
        for key in _section(data, "packages"):
            if key:
                names.add(str(key).rsplit("node_modules/", 1)[-1])
        self._collect_legacy(_section(data, "dependencies"), names)
        return names

    def _collect_legacy(self, dependencies: Dict[str, Any], names: Set[str]) -> None:
        for name, entry in dependencies.items():
            names.add(name)
            if isinstance(entry, dict):
                self._collect_legacy(_section(entry, "dependencies"), names)


class YarnLockfile(LockfileFormat):
    filename = "yarn.lock"

    def matches(self, identifier: str, content: str) -> bool:
        return f"{identifier}@" in content

    def extract_candidates(self, content: str) -> List[str]:
        return _unique(
            name
            for line in content.splitlines()
            if MARKER in line
            for name in self._header_names(line)
            if MARKER in name
        )

    def parse_packages(self, content: str) -> Optional[Set[str]]:
        names: Set[str] = set()
        for line in content.splitlines():
            names.update(self._header_names(line))
        return names

    @staticmethod
    def _header_names(line: str) -> List[str]:
        # Entry headers are unindented: `"@scope/a@^1.0.0", a@~1.0.0:`
        if not line or line[0] in " \t#" or not line.rstrip().endswith(":"):
            return []
        if line.startswith("__metadata"):
            return []
        specifiers = line.rstrip().rstrip(":").split(",")
        return [_split_specifier(spec) for spec in specifiers if "@" in spec[1:]]


class BunLockfile(LockfileFormat):
    filename = "bun.lock"

    def decode(self, raw: bytes) -> str:
        return "\n".join(extract_strings(raw))

    def extract_candidates(self, content: str) -> List[str]:
        return _unique(
            token
            for line in content.splitlines()
            if MARKER in line
            for token in RE_BUN_TOKEN.findall(line)
        )


class PnpmLockfile(LockfileFormat):
    filename = "pnpm-lock.yaml"

    def extract_candidates(self, content: str) -> List[str]:
        tokens = RE_QUOTED.findall(content) + RE_SINGLE_QUOTED.findall(content)
        return _unique(token for token in tokens if MARKER in token)

    def parse_packages(self, content: str) -> Optional[Set[str]]:
        try:
            data = yaml.safe_load(content) or {}
        except yaml.YAMLError as exc:
            raise ValueError(str(exc)) from exc
        if not isinstance(data, dict):
            raise ValueError("lockfile root must be a mapping")

        names: Set[str] = set()
        for section in ("packages", "snapshots"):
            for key in _section(data, section):
                names.add(self._key_name(str(key)))

        for importer in _section(data, "importers").values():
            if not isinstance(importer, dict):
                continue
            self._collect_declared(importer, names)
        self._collect_declared(data, names)
        return names

    @staticmethod
    def _collect_declared(data: Dict[str, Any], names: Set[str]) -> None:
        for section in ("dependencies", "devDependencies", "optionalDependencies"):
            names.update(str(name) for name in _section(data, section))

    @staticmethod
    def _key_name(key: str) -> str:
        key = key.lstrip("/").split("(", 1)[0]
        if "@" in key[1:]:
            return _split_specifier(key)
        # pnpm v5 keys: /name/1.0.0 and /@scope/name/1.0.0
        return key.rsplit("/", 1)[0] if "/" in key else key


LOCKFILE_FORMATS: tuple[LockfileFormat, ...] = (
    NpmLockfile(),
    YarnLockfile(),
    BunLockfile(),
    PnpmLockfile(),
)


__all__ = [
    "LOCKFILE_FORMATS",
    "MARKER",
    "BunLockfile",
    "LockfileFormat",
    "NpmLockfile",
    "PnpmLockfile",
    "YarnLockfile",
]
