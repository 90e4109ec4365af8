"""Helpers for building Node.js project fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union


def write_manifest(
    root: Path,
    dependencies: Optional[Mapping[str, str]] = None,
    name: str = "fixture",
    **sections: Mapping[str, str],
) -> Path:
    """Write a ``package.json`` under ``root``."""

    root.mkdir(parents=True, exist_ok=True)
    data: Dict[str, object] = {"name": name, "version": "1.0.0"}
    if dependencies is not None:
        data["dependencies"] = dict(dependencies)
    data.update({key: dict(value) for key, value in sections.items()})
    manifest = root / "package.json"
    manifest.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return manifest


def install_packages(root: Path, packages: Iterable[str]) -> Path:
    """Create ``node_modules`` directories for ``packages``."""

    install_dir = root / "node_modules"
    install_dir.mkdir(parents=True, exist_ok=True)
    for package in packages:
        target = install_dir.joinpath(*package.split("/"))
        target.mkdir(parents=True, exist_ok=True)
        (target / "package.json").write_text(
            json.dumps({"name": package, "version": "1.0.0"}), encoding="utf-8"
        )
    return install_dir


def write_lockfile(root: Path, name: str, content: Union[str, bytes]) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / name
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


__all__ = ["install_packages", "write_lockfile", "write_manifest"]
