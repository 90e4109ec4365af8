"""Tests for the manifest and installed-tree passes."""

from __future__ import annotations

from pathlib import Path

import pytest

from hulud_scan.core.models import Project, SignatureSet, Stage
from hulud_scan.scanners.installed import InstalledTreeScanner, install_path
from hulud_scan.scanners.manifest import ManifestScanner
from tests.utils import install_packages, write_manifest


def test_manifest_exact_quoted_match(tmp_path: Path, signatures: SignatureSet) -> None:
    write_manifest(tmp_path, {"evil-pkg": "1.0.0", "react": "^18.0.0"})
    project = Project(root=tmp_path)

    findings = ManifestScanner(signatures).scan(project)

    assert [(f.package, f.stage) for f in findings] == [("evil-pkg", Stage.DIRECT)]
    assert findings[0].source == tmp_path / "package.json"


def test_manifest_ignores_prefix_collisions(tmp_path: Path, signatures: SignatureSet) -> None:
    write_manifest(tmp_path, {"evil-pkg-extra": "1.0.0", "not-other-bad": "2.0.0"})

    assert ManifestScanner(signatures).scan(Project(root=tmp_path)) == []


def test_manifest_matches_scoped_identifier(tmp_path: Path, signatures: SignatureSet) -> None:
    write_manifest(tmp_path, devDependencies={"@evil/scoped": "0.1.0"})

    findings = ManifestScanner(signatures).scan(Project(root=tmp_path))

    assert [f.package for f in findings] == ["@evil/scoped"]


def test_manifest_text_mode_matches_any_string_field(
    tmp_path: Path, signatures: SignatureSet
) -> None:
    write_manifest(tmp_path, name="other-bad")

    findings = ManifestScanner(signatures).scan(Project(root=tmp_path))

    assert [f.package for f in findings] == ["other-bad"]


def test_manifest_strict_mode_only_reads_dependency_sections(
    tmp_path: Path, signatures: SignatureSet
) -> None:
    write_manifest(tmp_path, name="other-bad", peerDependencies={"evil-pkg": "*"})

    findings = ManifestScanner(signatures, strict=True).scan(Project(root=tmp_path))

    assert [f.package for f in findings] == ["evil-pkg"]


def test_manifest_strict_mode_warns_on_invalid_json(
    tmp_path: Path, signatures: SignatureSet
) -> None:
    (tmp_path / "package.json").write_text('{"dependencies": {"evil-pkg": ', encoding="utf-8")
    project = Project(root=tmp_path)

    assert ManifestScanner(signatures, strict=True).scan(project) == []
    assert any("Cannot parse" in warning for warning in project.warnings)


def test_manifest_reports_each_identifier_once(tmp_path: Path) -> None:
    write_manifest(tmp_path, {"evil-pkg": "1.0.0"}, devDependencies={"evil-pkg": "1.0.0"})
    duplicated = SignatureSet(packages=("evil-pkg", "evil-pkg"))

    findings = ManifestScanner(duplicated).scan(Project(root=tmp_path))

    assert len(findings) == 1


def test_manifest_missing_is_a_warning(tmp_path: Path, signatures: SignatureSet) -> None:
    project = Project(root=tmp_path)

    assert ManifestScanner(signatures).scan(project) == []
    assert project.warnings == [f"package.json not found in {tmp_path}"]


def test_manifest_unreadable_is_a_warning(
    tmp_path: Path, signatures: SignatureSet, monkeypatch: pytest.MonkeyPatch
) -> None:
    write_manifest(tmp_path, {"evil-pkg": "1.0.0"})
    project = Project(root=tmp_path)

    def _raise(path: Path) -> str:
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("hulud_scan.utils.io.read_text", _raise)

    assert ManifestScanner(signatures).scan(project) == []
    assert project.warnings and "Permission denied" in project.warnings[0]


def test_install_path_resolution(tmp_path: Path) -> None:
    assert install_path(tmp_path, "@scope/pkg") == tmp_path / "@scope" / "pkg"
    assert install_path(tmp_path, "pkg") == tmp_path / "pkg"


def test_installed_tree_finds_unscoped_and_scoped(
    tmp_path: Path, signatures: SignatureSet
) -> None:
    write_manifest(tmp_path)
    install_packages(tmp_path, ["evil-pkg", "@evil/scoped", "react"])

    findings = InstalledTreeScanner(signatures).scan(Project(root=tmp_path))

    assert [(f.package, f.stage) for f in findings] == [
        ("evil-pkg", Stage.TRANSITIVE),
        ("@evil/scoped", Stage.TRANSITIVE),
    ]
    assert findings[1].source == tmp_path / "node_modules" / "@evil" / "scoped"


def test_installed_tree_requires_two_level_scoped_layout(tmp_path: Path) -> None:
    write_manifest(tmp_path)
    install_dir = install_packages(tmp_path, ["@scope"])
    (install_dir / "pkg").mkdir()
    scoped = SignatureSet(packages=("@scope/pkg",))

    assert InstalledTreeScanner(scoped).scan(Project(root=tmp_path)) == []

    (install_dir / "@scope" / "pkg").mkdir()
    findings = InstalledTreeScanner(scoped).scan(Project(root=tmp_path))
    assert [f.source for f in findings] == [install_dir / "@scope" / "pkg"]


def test_installed_tree_ignores_nested_copies(tmp_path: Path, signatures: SignatureSet) -> None:
    write_manifest(tmp_path)
    install_packages(tmp_path / "node_modules" / "react", ["evil-pkg"])

    assert InstalledTreeScanner(signatures).scan(Project(root=tmp_path)) == []


def test_installed_tree_ignores_plain_files(tmp_path: Path, signatures: SignatureSet) -> None:
    install_dir = install_packages(tmp_path, [])
    (install_dir / "evil-pkg").write_text("not a package", encoding="utf-8")

    assert InstalledTreeScanner(signatures).scan(Project(root=tmp_path)) == []


def test_installed_tree_missing_is_a_warning(tmp_path: Path, signatures: SignatureSet) -> None:
    write_manifest(tmp_path)
    project = Project(root=tmp_path)

    assert InstalledTreeScanner(signatures).scan(project) == []
    assert len(project.warnings) == 1
    assert "node_modules not found" in project.warnings[0]

def _deny(monkeypatch: pytest.MonkeyPatch, method: str, denied: Path) -> None:
    original = getattr(Path, method)

    def _check(path: Path) -> bool:
        if path == denied:
            raise PermissionError(13, "Permission denied")
        return original(path)

    monkeypatch.setattr(Path, method, _check)


def test_manifest_inaccessible_is_a_warning(
    tmp_path: Path, signatures: SignatureSet, monkeypatch: pytest.MonkeyPatch
) -> None:
    manifest = write_manifest(tmp_path, {"evil-pkg": "1.0.0"})
    _deny(monkeypatch, "is_file", manifest)
    project = Project(root=tmp_path)

    assert ManifestScanner(signatures).scan(project) == []
    assert project.warnings == [f"Cannot access {manifest}: Permission denied"]


def test_installed_tree_inaccessible_is_a_warning(
    tmp_path: Path, signatures: SignatureSet, monkeypatch: pytest.MonkeyPatch
) -> None:
    install_dir = install_packages(tmp_path, ["evil-pkg"])
    _deny(monkeypatch, "is_dir", install_dir)
    project = Project(root=tmp_path)

    assert InstalledTreeScanner(signatures).scan(project) == []
    assert project.warnings == [f"Cannot access {install_dir}: Permission denied"]


def test_installed_tree_skips_inaccessible_scope(
    tmp_path: Path, signatures: SignatureSet, monkeypatch: pytest.MonkeyPatch
) -> None:
    install_dir = install_packages(tmp_path, ["evil-pkg", "other-bad", "@evil/scoped"])
    scoped = install_dir / "@evil" / "scoped"
    _deny(monkeypatch, "is_dir", scoped)
    project = Project(root=tmp_path)

    findings = InstalledTreeScanner(signatures).scan(project)

    assert [f.package for f in findings] == ["evil-pkg", "other-bad"]
    assert project.warnings == [f"Cannot access {scoped}: Permission denied"]



def test_execute_records_findings_on_project(tmp_path: Path, signatures: SignatureSet) -> None:
    write_manifest(tmp_path, {"evil-pkg": "1.0.0"})
    project = Project(root=tmp_path)

    returned = ManifestScanner(signatures).execute(project)

    assert project.findings == returned
    assert not project.is_clean
