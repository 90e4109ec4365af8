"""Discovery of Node.js project roots below a scan path."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .errors import InvalidInput, NoProjectsFound
from .logger import get_module_logger
from .models import INSTALL_DIR_NAME, MANIFEST_NAME, Project

logger = get_module_logger("locator")


class ProjectLocator:
    """Find every directory holding a ``package.json``.

    Manifests inside ``node_modules`` belong to installed dependencies, not to
    projects, and are never reported. This includes a scan root that itself
    lies below a ``node_modules`` directory.
    """

    def __init__(
        self,
        manifest_name: str = MANIFEST_NAME,
        install_dir_name: str = INSTALL_DIR_NAME,
    ):
        self.manifest_name = manifest_name
        self.install_dir_name = install_dir_name

    def discover(self, root: Path) -> List[Project]:
        root = Path(root)
        if not root.exists():
            raise InvalidInput(f"Directory '{root}' does not exist")
        if not root.is_dir():
            raise InvalidInput(f"'{root}' is not a directory")

        candidates = set()
        for dirpath, dirnames, filenames in os.walk(root, onerror=self._walk_error):
            # Pruning is equivalent to excluding every manifest below it.
            dirnames[:] = [name for name in dirnames if name != self.install_dir_name]
            if self.manifest_name not in filenames:
                continue
            candidate = Path(dirpath).resolve()
            if self._is_installed_dependency(candidate):
                continue
            candidates.add(candidate)

        if not candidates:
            raise NoProjectsFound(f"No Node.js projects found in {root}")

        projects = [Project(root=path) for path in sorted(candidates, key=str)]
        logger.info("Found %d project(s) under %s", len(projects), root)
        return projects

    def _is_installed_dependency(self, path: Path) -> bool:
        return self.install_dir_name in path.parts

    @staticmethod
    def _walk_error(error: OSError) -> None:
        logger.warning("Cannot list %s: %s", error.filename, error.strerror)


__all__ = ["ProjectLocator"]
