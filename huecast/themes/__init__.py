"""Theme loading exports."""

from huecast.themes.constants import DEFAULT_THEME_NAME
from huecast.themes.loader import load_theme
from huecast.themes.models import Theme, ThemeColors, ThemeSummary, ThemeValidationError
from huecast.themes.registry import ThemeRegistry

__all__ = [
    "DEFAULT_THEME_NAME",
    "Theme",
    "ThemeColors",
    "ThemeSummary",
    "ThemeValidationError",
    "ThemeRegistry",
    "load_theme",
]
