"""WezTerm adapter."""

from __future__ import annotations

import logging
from pathlib import Path

from huecast.apps.adapter import AppAdapter, AppCategory, LogCallback, Snippet, ThemeConfigOutput
from huecast.apps.notify import copy_artifact, first_existing, touch
from huecast.themes.models import ThemeColors

logger = logging.getLogger(__name__)

FILE_NAME = "wezterm.lua"
LIVE_FILE_NAME = "wezterm-colors.lua"


def generate_wezterm_config(colors: ThemeColors) -> str:
    ansi = "\n".join(f'    "{value}",' for value in colors.ansi)
    brights = "\n".join(f'    "{value}",' for value in colors.brights)
    return f"""-- WezTerm color configuration
-- Add this to your wezterm.lua or require() this file
return {{
  foreground = "{colors.foreground}",
  background = "{colors.background}",
  cursor_bg = "{colors.cursor}",
  cursor_fg = "{colors.background}",
  cursor_border = "{colors.cursor}",
  selection_bg = "{colors.bright_black}",
  selection_fg = "{colors.foreground}",
  scrollbar_thumb = "{colors.bright_black}",
  split = "{colors.border}",

  ansi = {{
{ansi}
  }},
  brights = {{
{brights}
  }},

  tab_bar = {{
    background = "{colors.background}",
    active_tab = {{
      bg_color = "{colors.accent}",
      fg_color = "{colors.background}",
    }},
    inactive_tab = {{
      bg_color = "{colors.background}",
      fg_color = "{colors.bright_black}",
    }},
    inactive_tab_hover = {{
      bg_color = "{colors.selection}",
      fg_color = "{colors.foreground}",
    }},
    new_tab = {{
      bg_color = "{colors.background}",
      fg_color = "{colors.bright_black}",
    }},
    new_tab_hover = {{
      bg_color = "{colors.selection}",
      fg_color = "{colors.foreground}",
    }},
  }},
}}
"""


def build_wezterm_adapter(home: Path, data_dir: Path) -> AppAdapter:
    config_paths = (
        home / ".wezterm.lua",
        home / ".config" / "wezterm" / "wezterm.lua",
    )
    live_path = data_dir / LIVE_FILE_NAME

    def generate(colors: ThemeColors) -> ThemeConfigOutput:
        return ThemeConfigOutput(FILE_NAME, generate_wezterm_config(colors))

    def notify(theme_dir: Path, on_log: LogCallback | None = None) -> bool:
        source = theme_dir / FILE_NAME
        if not source.exists():
            return False
        try:
            copy_artifact(source, live_path)
            # The colors file is only watched if the user added it to the reload list.
            touch(live_path)
            config = first_existing(config_paths)
            if config is not None:
                touch(config)
        except OSError as exc:
            logger.warning("wezterm notify failed: %s", exc)
            return False
        if on_log:
            on_log("WezTerm theme file updated")
        return True

    return AppAdapter(
        name="wezterm",
        display_name="WezTerm",
        category=AppCategory.TERMINAL,
        install_paths=(
            Path("/Applications/WezTerm.app"),
            home / "Applications" / "WezTerm.app",
            Path("/usr/bin/wezterm"),
        ),
        config_path=home / ".config" / "wezterm" / "wezterm.lua",
        config_paths=config_paths,
        snippet=Snippet(
            code=(
                "-- Huecast WezTerm integration\n"
                f'local colors_path = "{live_path}"\n'
                "wezterm.add_to_config_reload_watch_list(colors_path)\n"
                "config.colors = dofile(colors_path)"
            ),
            instructions="Add this after your `config = wezterm.config_builder()` line:",
        ),
        generate_config=generate,
        notify=notify,
    )
