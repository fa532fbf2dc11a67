"""Theme framework constants."""

from __future__ import annotations

DEFAULT_THEME_NAME = "tokyo-night"
THEME_METADATA_FILE = "theme.json"
LIGHT_MODE_MARKER = "light.mode"
WALLPAPERS_DIR = "wallpapers"

# Descriptor key -> ThemeColors field, in declaration order.
COLOR_KEYS: tuple[tuple[str, str], ...] = (
    ("background", "background"),
    ("foreground", "foreground"),
    ("cursor", "cursor"),
    ("selection", "selection"),
    ("accent", "accent"),
    ("border", "border"),
    ("black", "black"),
    ("red", "red"),
    ("green", "green"),
    ("yellow", "yellow"),
    ("blue", "blue"),
    ("magenta", "magenta"),
    ("cyan", "cyan"),
    ("white", "white"),
    ("brightBlack", "bright_black"),
    ("brightRed", "bright_red"),
    ("brightGreen", "bright_green"),
    ("brightYellow", "bright_yellow"),
    ("brightBlue", "bright_blue"),
    ("brightMagenta", "bright_magenta"),
    ("brightCyan", "bright_cyan"),
    ("brightWhite", "bright_white"),
)

IMAGE_EXTENSIONS: frozenset[str] = frozenset({".png", ".jpg", ".jpeg", ".heic", ".webp"})
