"""Warp adapter: writes a custom theme YAML into Warp's themes folder."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from huecast.apps.adapter import AppAdapter, AppCategory, LogCallback, Snippet, ThemeConfigOutput
from huecast.apps.notify import copy_artifact
from huecast.themes.models import ThemeColors

logger = logging.getLogger(__name__)

FILE_NAME = "warp.yaml"
THEME_FILE_NAME = "huecast.yaml"

_ANSI_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")


def generate_warp_config(colors: ThemeColors) -> str:
    config: dict = {
        "name": "Huecast",
        "accent": colors.accent,
        "background": colors.background,
        "foreground": colors.foreground,
        "details": "darker",
        "terminal_colors": {
            "normal": dict(zip(_ANSI_NAMES, colors.ansi)),
            "bright": dict(zip(_ANSI_NAMES, colors.brights)),
        },
    }
    return yaml.dump(config, default_flow_style=False, sort_keys=False)


def build_warp_adapter(home: Path, data_dir: Path) -> AppAdapter:
    theme_path = home / ".warp" / "themes" / THEME_FILE_NAME

    def generate(colors: ThemeColors) -> ThemeConfigOutput:
        return ThemeConfigOutput(FILE_NAME, generate_warp_config(colors))

    def notify(theme_dir: Path, on_log: LogCallback | None = None) -> bool:
        source = theme_dir / FILE_NAME
        if not source.exists():
            return False
        try:
            copy_artifact(source, theme_path)
        except OSError as exc:
            logger.warning("warp notify failed: %s", exc)
            return False
        if on_log:
            on_log("Warp theme updated (select 'Huecast' in Settings > Appearance)")
        return True

    return AppAdapter(
        name="warp",
        display_name="Warp",
        category=AppCategory.TERMINAL,
        install_paths=(
            Path("/Applications/Warp.app"),
            home / "Applications" / "Warp.app",
        ),
        config_path=theme_path,
        snippet=Snippet(
            code=str(theme_path),
            instructions="Huecast keeps this theme file updated. Pick 'Huecast' under Settings > Appearance > Themes.",
        ),
        generate_config=generate,
        notify=notify,
    )
