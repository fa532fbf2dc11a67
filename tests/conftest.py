"""Shared fixtures: palettes, theme directories, settings and fake adapters."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import pytest
from PySide6.QtCore import QSettings

from huecast.apps.adapter import AppAdapter, AppCategory, ThemeConfigOutput
from huecast.config.settings import DATA_DIR_ENV, AppSettings
from huecast.themes.loader import parse_colors
from huecast.themes.models import ThemeColors

TOKYO_NIGHT = {
    "background": "#1a1b26",
    "foreground": "#c0caf5",
    "cursor": "#c0caf5",
    "selection": "#33467c",
    "accent": "#7aa2f7",
    "border": "#414868",
    "black": "#15161e",
    "red": "#f7768e",
    "green": "#9ece6a",
    "yellow": "#e0af68",
    "blue": "#7aa2f7",
    "magenta": "#bb9af7",
    "cyan": "#7dcfff",
    "white": "#a9b1d6",
    "brightBlack": "#414868",
    "brightRed": "#f7768e",
    "brightGreen": "#9ece6a",
    "brightYellow": "#e0af68",
    "brightBlue": "#7aa2f7",
    "brightMagenta": "#bb9af7",
    "brightCyan": "#7dcfff",
    "brightWhite": "#c0caf5",
}


def write_theme(
    root: Path,
    name: str,
    colors: dict[str, str] | None = None,
    *,
    light: bool = False,
    wallpapers: tuple[str, ...] = (),
    **metadata: object,
) -> Path:
    theme_dir = root / name
    theme_dir.mkdir(parents=True, exist_ok=True)
    data: dict[str, object] = {"name": name, "colors": dict(colors or TOKYO_NIGHT)}
    data.update(metadata)
    (theme_dir / "theme.json").write_text(json.dumps(data, indent=2), encoding="utf-8")
    if light:
        (theme_dir / "light.mode").write_text("", encoding="utf-8")
    if wallpapers:
        wallpaper_dir = theme_dir / "wallpapers"
        wallpaper_dir.mkdir(exist_ok=True)
        for file_name in wallpapers:
            (wallpaper_dir / file_name).write_bytes(b"\x89PNG")
    return theme_dir


def make_adapter(
    name: str,
    *,
    generate: Callable | None = None,
    notify: Callable | None = None,
    detect: Callable | None = None,
    install_paths: tuple[Path, ...] = (Path("/nonexistent/app"),),
    config_path: Path = Path("/nonexistent/config"),
    config_paths: tuple[Path, ...] = (),
) -> AppAdapter:
    return AppAdapter(
        name=name,
        display_name=name.title(),
        category=AppCategory.TERMINAL,
        install_paths=install_paths,
        config_path=config_path,
        config_paths=config_paths,
        generate_config=generate,
        detect_integration=detect,
        notify=notify,
    )


def static_generator(file_name: str) -> Callable[[ThemeColors], ThemeConfigOutput]:
    def generate(colors: ThemeColors) -> ThemeConfigOutput:
        return ThemeConfigOutput(file_name, f"bg={colors.background}\n")

    return generate


@pytest.fixture
def palette() -> ThemeColors:
    return parse_colors(TOKYO_NIGHT, context="tests")


@pytest.fixture
def settings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    monkeypatch.delenv(DATA_DIR_ENV, raising=False)
    qs = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    app_settings = AppSettings(qs)
    app_settings.data_dir = tmp_path / "data"
    return app_settings
