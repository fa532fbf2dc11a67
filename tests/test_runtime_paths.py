from __future__ import annotations

from pathlib import Path

from huecast import runtime_paths


def test_source_package_root_points_to_repo_package() -> None:
    root = runtime_paths.package_root()
    assert root.name == "huecast"
    assert (root / "core").exists()


def test_bundled_binary_lives_under_resources_bin() -> None:
    path = runtime_paths.bundled_binary("desktoppr")
    assert path.name == "desktoppr"
    assert path.parent.name == "bin"
    assert path.parent.parent.name == "resources"


def test_frozen_prefers_meipass_huecast_dir(tmp_path: Path, monkeypatch) -> None:
    bundle_root = tmp_path / "bundle"
    package_root = bundle_root / "huecast"
    package_root.mkdir(parents=True)
    monkeypatch.setattr(runtime_paths.sys, "frozen", True, raising=False)
    monkeypatch.setattr(runtime_paths.sys, "_MEIPASS", str(bundle_root), raising=False)

    assert runtime_paths.package_root() == package_root
    assert runtime_paths.bundled_binary("desktoppr") == package_root / "resources" / "bin" / "desktoppr"


def test_frozen_falls_back_to_meipass_when_huecast_missing(tmp_path: Path, monkeypatch) -> None:
    bundle_root = tmp_path / "bundle"
    bundle_root.mkdir(parents=True)
    monkeypatch.setattr(runtime_paths.sys, "frozen", True, raising=False)
    monkeypatch.setattr(runtime_paths.sys, "_MEIPASS", str(bundle_root), raising=False)

    assert runtime_paths.package_root() == bundle_root
