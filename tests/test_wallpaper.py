"""Tests for the dual-strategy wallpaper applier."""

from __future__ import annotations

from pathlib import Path
import subprocess

import pytest

from huecast.core import wallpaper as wallpaper_mod
from huecast.core.wallpaper import (
    OSASCRIPT,
    WallpaperApplier,
    applescript_args,
    desktoppr_args,
    escape_applescript_string,
    find_desktoppr,
)
from huecast.errors import ErrorCode, WallpaperError


class RecordingRunner:
    """Records commands and fails the ones whose executable is in ``fail``."""

    def __init__(self, fail: tuple[str, ...] = ()) -> None:
        self.calls: list[list[str]] = []
        self._fail = fail

    def __call__(self, args) -> None:
        args = list(args)
        self.calls.append(args)
        if any(args[0].endswith(name) for name in self._fail):
            raise subprocess.CalledProcessError(1, args, stderr=f"{Path(args[0]).name} broke")


@pytest.fixture
def image(tmp_path: Path) -> Path:
    path = tmp_path / "wall.png"
    path.write_bytes(b"\x89PNG")
    return path


@pytest.fixture
def desktoppr(tmp_path: Path) -> Path:
    binary = tmp_path / "bin" / "desktoppr"
    binary.parent.mkdir()
    binary.write_text("#!/bin/sh\n", encoding="utf-8")
    return binary


@pytest.fixture
def no_system_desktoppr(monkeypatch, tmp_path: Path):
    monkeypatch.setattr(wallpaper_mod, "bundled_binary", lambda name: tmp_path / "nope" / name)
    monkeypatch.setattr(wallpaper_mod, "_SYSTEM_DESKTOPPR_PATHS", ())


class TestFindDesktoppr:
    def test_explicit_path_wins(self, desktoppr: Path):
        assert find_desktoppr(desktoppr) == desktoppr

    def test_missing_everywhere(self, tmp_path: Path, no_system_desktoppr):
        assert find_desktoppr(tmp_path / "missing") is None
        assert find_desktoppr(None) is None

    def test_bundled_before_system(self, tmp_path: Path, monkeypatch, desktoppr: Path):
        system = tmp_path / "usr-local-desktoppr"
        system.write_text("", encoding="utf-8")
        monkeypatch.setattr(wallpaper_mod, "bundled_binary", lambda name: desktoppr)
        monkeypatch.setattr(wallpaper_mod, "_SYSTEM_DESKTOPPR_PATHS", (system,))
        assert find_desktoppr() == desktoppr


class TestCommandConstruction:
    def test_display_index_is_zero_based_for_desktoppr(self, desktoppr: Path, image: Path):
        assert desktoppr_args(desktoppr, image, 2) == [str(desktoppr), "1", str(image)]

    def test_desktoppr_all_displays(self, desktoppr: Path, image: Path):
        assert desktoppr_args(desktoppr, image, None) == [str(desktoppr), str(image)]

    def test_applescript_targets_specific_desktop(self, image: Path):
        args = applescript_args(image, 2)
        assert args[:2] == [OSASCRIPT, "-e"]
        assert f'set picture of desktop 2 to "{image}"' in args[2]

    def test_applescript_targets_every_desktop(self, image: Path):
        assert "tell every desktop to set picture to" in applescript_args(image, None)[2]

    def test_escape_quotes_and_backslashes(self):
        assert escape_applescript_string('a"b\\c') == 'a\\"b\\\\c'

    def test_escaped_path_stays_inside_string_literal(self):
        script = applescript_args(Path('/tmp/evil" & do shell script "rm -rf ~'), None)[2]
        assert '\\" & do shell script \\"' in script


class TestWallpaperApplier:
    def test_both_strategies_run_when_first_succeeds(self, desktoppr: Path, image: Path):
        runner = RecordingRunner()
        report = WallpaperApplier(desktoppr, runner).apply(image)

        assert report.success
        assert report.desktoppr_ok and report.applescript_ok
        assert [call[0] for call in runner.calls] == [str(desktoppr), OSASCRIPT]

    def test_unavailable_a_and_successful_b_is_success(self, image: Path, no_system_desktoppr):
        runner = RecordingRunner()
        report = WallpaperApplier(None, runner).apply(image)

        assert report.success
        assert report.desktoppr_attempted is False
        assert [call[0] for call in runner.calls] == [OSASCRIPT]

    def test_failed_a_and_successful_b_is_success(self, desktoppr: Path, image: Path):
        report = WallpaperApplier(desktoppr, RecordingRunner(fail=("desktoppr",))).apply(image)

        assert report.success
        assert report.errors == ["desktoppr: exit 1: desktoppr broke"]

    def test_successful_a_and_failed_b_is_success(self, desktoppr: Path, image: Path):
        report = WallpaperApplier(desktoppr, RecordingRunner(fail=("osascript",))).apply(image)
        assert report.success

    def test_both_fail_reports_both_messages(self, desktoppr: Path, image: Path):
        runner = RecordingRunner(fail=("desktoppr", "osascript"))
        with pytest.raises(WallpaperError) as excinfo:
            WallpaperApplier(desktoppr, runner).apply(image)

        message = str(excinfo.value)
        assert excinfo.value.code is ErrorCode.WALLPAPER_APPLY_FAILED
        assert "desktoppr broke" in message
        assert "osascript broke" in message

    def test_unavailable_a_and_failed_b_reports_both(self, image: Path, no_system_desktoppr):
        with pytest.raises(WallpaperError) as excinfo:
            WallpaperApplier(None, RecordingRunner(fail=("osascript",))).apply(image)

        assert "desktoppr: not found" in str(excinfo.value)
        assert "AppleScript: exit 1" in str(excinfo.value)

    def test_display_index_passed_zero_based(self, desktoppr: Path, image: Path):
        runner = RecordingRunner()
        WallpaperApplier(desktoppr, runner).apply(image, display_index=2)

        assert runner.calls[0] == [str(desktoppr), "1", str(image)]
        assert "desktop 2" in runner.calls[1][2]

    def test_zero_display_index_rejected(self, desktoppr: Path, image: Path):
        with pytest.raises(ValueError):
            WallpaperApplier(desktoppr, RecordingRunner()).apply(image, display_index=0)

    def test_missing_executable_counts_as_failure(self, desktoppr: Path, image: Path):
        def runner(args):
            if args[0] == OSASCRIPT:
                raise FileNotFoundError(OSASCRIPT)

        report = WallpaperApplier(desktoppr, runner).apply(image)
        assert report.success
        assert report.errors[0].startswith("AppleScript:")

    def test_on_log_receives_progress(self, image: Path, no_system_desktoppr):
        messages: list[str] = []
        WallpaperApplier(None, RecordingRunner()).apply(image, on_log=messages.append)
        assert messages == ["desktoppr not found, skipping", "AppleScript applied wallpaper"]
