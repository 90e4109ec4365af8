import logging
import os
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for package imports during tests.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hulud_scan.core.models import SignatureSet  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_scanner_logging():
    yield
    logging.getLogger("hulud_scan").handlers.clear()


@pytest.fixture(autouse=True)
def clear_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("HULUD_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def signatures() -> SignatureSet:
    return SignatureSet(packages=("evil-pkg", "@evil/scoped", "other-bad"))


@pytest.fixture()
def signature_file(tmp_path: Path) -> Path:
    path = tmp_path / "packages.txt"
    path.write_text(
        "# compromised packages\n\nevil-pkg\n@evil/scoped\nother-bad\n",
        encoding="utf-8",
    )
    return path
