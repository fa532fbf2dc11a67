"""Neovim adapter.

Neovim's config is a directory, so integration detection looks for
``init.lua`` inside it rather than at the directory path itself.
"""

from __future__ import annotations

import logging
from pathlib import Path

from huecast.apps.adapter import (
    AppAdapter,
    AppCategory,
    LogCallback,
    Snippet,
    ThemeConfigOutput,
    has_integration_markers,
)
from huecast.apps.notify import copy_artifact
from huecast.core.colors import blend_colors
from huecast.themes.models import ThemeColors

logger = logging.getLogger(__name__)

FILE_NAME = "neovim.lua"
CURSOR_LINE_BLEND = 0.05


def generate_neovim_config(colors: ThemeColors) -> str:
    cursor_line = blend_colors(colors.background, colors.foreground, CURSOR_LINE_BLEND) or colors.background
    return f"""-- Neovim colorscheme configuration
vim.cmd([[
  hi Normal guibg={colors.background} guifg={colors.foreground}
  hi Cursor guibg={colors.cursor}
  hi Visual guibg={colors.selection}
  hi LineNr guifg={colors.bright_black}
  hi CursorLine guibg={cursor_line}
  hi CursorLineNr guifg={colors.accent} guibg={cursor_line}
  hi Comment guifg={colors.bright_black}
  hi String guifg={colors.green}
  hi Function guifg={colors.blue}
  hi Keyword guifg={colors.magenta}
  hi Type guifg={colors.yellow}
  hi Constant guifg={colors.cyan}
  hi Error guifg={colors.red}
  hi WinSeparator guifg={colors.border}
]])
"""


def detect_neovim_integration(config_path: Path) -> bool:
    init_lua = config_path if config_path.name == "init.lua" else config_path / "init.lua"
    return has_integration_markers(init_lua)


def build_neovim_adapter(home: Path, data_dir: Path) -> AppAdapter:
    live_path = data_dir / FILE_NAME

    def generate(colors: ThemeColors) -> ThemeConfigOutput:
        return ThemeConfigOutput(FILE_NAME, generate_neovim_config(colors))

    def notify(theme_dir: Path, on_log: LogCallback | None = None) -> bool:
        # Running instances only pick this up on the next :source or restart.
        source = theme_dir / FILE_NAME
        if not source.exists():
            return False
        try:
            copy_artifact(source, live_path)
        except OSError as exc:
            logger.warning("neovim notify failed: %s", exc)
            return False
        if on_log:
            on_log("Neovim colors updated (restart or :source to reload)")
        return True

    nvim_dir = home / ".config" / "nvim"
    return AppAdapter(
        name="neovim",
        display_name="Neovim",
        category=AppCategory.EDITOR,
        install_paths=(Path("/usr/local/bin/nvim"), Path("/opt/homebrew/bin/nvim")),
        config_path=nvim_dir / "init.lua",
        config_paths=(nvim_dir,),
        snippet=Snippet(
            code=f'-- Huecast colors\ndofile(vim.fn.expand("{live_path}"))',
            instructions="Add this at the top of your init.lua:",
        ),
        generate_config=generate,
        detect_integration=detect_neovim_integration,
        notify=notify,
    )
