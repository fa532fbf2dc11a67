"""AeroSpace adapter.

AeroSpace itself has no color settings; window borders come from
JankyBorders, so the generated artifact is a script that restarts
``borders`` with theme colors.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
import subprocess

from huecast.apps.adapter import AppAdapter, AppCategory, LogCallback, Snippet, ThemeConfigOutput
from huecast.apps.notify import copy_artifact, first_existing, run_detached_command
from huecast.core.colors import to_argb
from huecast.themes.models import ThemeColors

logger = logging.getLogger(__name__)

FILE_NAME = "aerospace-borders.sh"
BORDER_WIDTH = "5.0"

_BORDERS_PATHS = (Path("/opt/homebrew/bin/borders"), Path("/usr/local/bin/borders"))


def generate_aerospace_config(colors: ThemeColors) -> str:
    return (
        "#!/bin/sh\n"
        "# JankyBorders colors generated by Huecast\n"
        f"borders active_color={to_argb(colors.accent)} "
        f"inactive_color={to_argb(colors.border)} "
        f"width={BORDER_WIDTH} &\n"
    )


def find_borders() -> Path | None:
    found = first_existing(_BORDERS_PATHS)
    if found is not None:
        return found
    on_path = shutil.which("borders")
    return Path(on_path) if on_path else None


def build_aerospace_adapter(home: Path, data_dir: Path) -> AppAdapter:
    live_path = data_dir / FILE_NAME

    def generate(colors: ThemeColors) -> ThemeConfigOutput:
        return ThemeConfigOutput(FILE_NAME, generate_aerospace_config(colors))

    def notify(theme_dir: Path, on_log: LogCallback | None = None) -> bool:
        source = theme_dir / FILE_NAME
        if not source.exists():
            return False
        try:
            copy_artifact(source, live_path)
            os.chmod(live_path, 0o755)
        except OSError as exc:
            logger.warning("aerospace notify failed: %s", exc)
            return False

        if find_borders() is None:
            if on_log:
                on_log("AeroSpace border script updated (JankyBorders not installed)")
            return True
        try:
            run_detached_command(["/bin/sh", str(live_path)])
        except (OSError, subprocess.SubprocessError) as exc:
            logger.warning("borders restart failed: %s", exc)
            return False
        if on_log:
            on_log("AeroSpace borders updated")
        return True

    return AppAdapter(
        name="aerospace",
        display_name="AeroSpace",
        category=AppCategory.TILING,
        install_paths=(
            Path("/Applications/AeroSpace.app"),
            Path("/opt/homebrew/bin/aerospace"),
            Path("/usr/local/bin/aerospace"),
        ),
        config_path=home / ".config" / "aerospace" / "aerospace.toml",
        config_paths=(
            home / ".aerospace.toml",
            home / ".config" / "aerospace" / "aerospace.toml",
        ),
        snippet=Snippet(
            code=f"# Huecast borders\nafter-startup-command = ['exec-and-forget {live_path}']",
            instructions="Add this to the top level of your aerospace.toml:",
        ),
        generate_config=generate,
        notify=notify,
    )
