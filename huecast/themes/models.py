"""Theme framework models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


class ThemeValidationError(ValueError):
    """Raised when a theme directory fails validation."""


@dataclass(frozen=True, slots=True)
class ThemeColors:
    """The full named palette every adapter generates from."""

    background: str
    foreground: str
    cursor: str
    selection: str
    accent: str
    border: str
    black: str
    red: str
    green: str
    yellow: str
    blue: str
    magenta: str
    cyan: str
    white: str
    bright_black: str
    bright_red: str
    bright_green: str
    bright_yellow: str
    bright_blue: str
    bright_magenta: str
    bright_cyan: str
    bright_white: str

    @property
    def ansi(self) -> tuple[str, ...]:
        return (
            self.black,
            self.red,
            self.green,
            self.yellow,
            self.blue,
            self.magenta,
            self.cyan,
            self.white,
        )

    @property
    def brights(self) -> tuple[str, ...]:
        return (
            self.bright_black,
            self.bright_red,
            self.bright_green,
            self.bright_yellow,
            self.bright_blue,
            self.bright_magenta,
            self.bright_cyan,
            self.bright_white,
        )


@dataclass(frozen=True, slots=True)
class Theme:
    """A loaded theme directory. Read-only once loaded."""

    name: str
    path: Path
    colors: ThemeColors
    is_custom: bool
    is_light: bool
    display_name: str = ""
    author: str = ""
    description: str = ""
    version: str = ""
    wallpapers: tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class ThemeSummary:
    """Display-ready theme metadata."""

    name: str
    display_name: str
    author: str
    description: str
    is_custom: bool
    is_light: bool
    path: Path
    wallpaper_count: int = 0
