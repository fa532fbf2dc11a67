"""SketchyBar adapter: shell exports of ARGB colors, then ``sketchybar --reload``."""

from __future__ import annotations

import logging
from pathlib import Path
import shutil
import subprocess

from huecast.apps.adapter import AppAdapter, AppCategory, LogCallback, Snippet, ThemeConfigOutput
from huecast.apps.notify import copy_artifact, first_existing, run_reload_command
from huecast.core.colors import to_argb
from huecast.themes.models import ThemeColors

logger = logging.getLogger(__name__)

FILE_NAME = "sketchybar-colors.sh"

_BINARY_PATHS = (Path("/opt/homebrew/bin/sketchybar"), Path("/usr/local/bin/sketchybar"))
_ANSI_NAMES = ("BLACK", "RED", "GREEN", "YELLOW", "BLUE", "MAGENTA", "CYAN", "WHITE")


def generate_sketchybar_config(colors: ThemeColors) -> str:
    lines = [
        "#!/bin/sh",
        "# SketchyBar colors generated by Huecast",
        "# Source this file from sketchybarrc",
        "",
        f'export COLOR_BACKGROUND="{to_argb(colors.background)}"',
        f'export COLOR_FOREGROUND="{to_argb(colors.foreground)}"',
        f'export COLOR_ACCENT="{to_argb(colors.accent)}"',
        f'export COLOR_SELECTION="{to_argb(colors.selection)}"',
        f'export COLOR_BORDER="{to_argb(colors.border)}"',
        "",
        f'export BAR_COLOR="{to_argb(colors.background)}"',
        f'export BAR_BORDER_COLOR="{to_argb(colors.border)}"',
        f'export ITEM_BG_COLOR="{to_argb(colors.selection)}"',
        f'export ICON_COLOR="{to_argb(colors.accent)}"',
        f'export LABEL_COLOR="{to_argb(colors.foreground)}"',
        "",
    ]
    lines.extend(
        f'export COLOR_{name}="{to_argb(value)}"' for name, value in zip(_ANSI_NAMES, colors.ansi)
    )
    lines.extend(
        f'export COLOR_BRIGHT_{name}="{to_argb(value)}"' for name, value in zip(_ANSI_NAMES, colors.brights)
    )
    lines.extend(
        [
            "",
            f'export COLOR_TRANSPARENT="{to_argb(colors.background, alpha="80")}"',
            f'export COLOR_SEMI_TRANSPARENT="{to_argb(colors.background, alpha="cc")}"',
        ]
    )
    return "\n".join(lines) + "\n"


def find_sketchybar() -> Path | None:
    found = first_existing(_BINARY_PATHS)
    if found is not None:
        return found
    on_path = shutil.which("sketchybar")
    return Path(on_path) if on_path else None


def build_sketchybar_adapter(home: Path, data_dir: Path) -> AppAdapter:
    live_path = data_dir / FILE_NAME

    def generate(colors: ThemeColors) -> ThemeConfigOutput:
        return ThemeConfigOutput(FILE_NAME, generate_sketchybar_config(colors))

    def notify(theme_dir: Path, on_log: LogCallback | None = None) -> bool:
        source = theme_dir / FILE_NAME
        if not source.exists():
            return False
        try:
            copy_artifact(source, live_path)
        except OSError as exc:
            logger.warning("sketchybar notify failed: %s", exc)
            return False

        binary = find_sketchybar()
        if binary is None:
            if on_log:
                on_log("SketchyBar colors updated (sketchybar not running)")
            return True
        try:
            run_reload_command([str(binary), "--reload"])
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("sketchybar reload failed: %s", exc)
            return False
        if on_log:
            on_log("SketchyBar reloaded")
        return True

    return AppAdapter(
        name="sketchybar",
        display_name="SketchyBar",
        category=AppCategory.SYSTEM,
        install_paths=_BINARY_PATHS,
        config_path=home / ".config" / "sketchybar" / "sketchybarrc",
        snippet=Snippet(
            code=f'# Huecast colors\nsource "{live_path}"',
            instructions="Add this near the top of your sketchybarrc:",
        ),
        generate_config=generate,
        notify=notify,
    )
