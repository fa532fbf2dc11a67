"""Theme directory parsing and validation."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from huecast.core.colors import is_valid_hex_color
from huecast.themes.constants import (
    COLOR_KEYS,
    IMAGE_EXTENSIONS,
    LIGHT_MODE_MARKER,
    THEME_METADATA_FILE,
    WALLPAPERS_DIR,
)
from huecast.themes.models import Theme, ThemeColors, ThemeValidationError

_MAX_METADATA_BYTES = 64 * 1024
_MAX_SHORT_FIELD_LEN = 120
_MAX_DESC_LEN = 500

_ALLOWED_METADATA_KEYS = {
    "name",
    "author",
    "description",
    "version",
    "colors",
    "colorLocks",
    "variants",
    "preview",
}


def load_theme(theme_dir: Path, *, is_custom: bool = False) -> Theme:
    """Load and validate a single theme directory."""
    if not theme_dir.exists() or not theme_dir.is_dir():
        raise ThemeValidationError(f"Theme path is not a directory: {theme_dir}")

    data = _load_json(theme_dir / THEME_METADATA_FILE, max_bytes=_MAX_METADATA_BYTES)
    _reject_unknown_keys(data, allowed=_ALLOWED_METADATA_KEYS, context=f"{theme_dir}/{THEME_METADATA_FILE}")

    colors_data = data.get("colors")
    if not isinstance(colors_data, dict):
        raise ThemeValidationError(f"{theme_dir}: 'colors' must be a JSON object")

    return Theme(
        name=theme_dir.name,
        path=theme_dir,
        colors=parse_colors(colors_data, context=str(theme_dir)),
        is_custom=is_custom,
        is_light=(theme_dir / LIGHT_MODE_MARKER).exists(),
        display_name=_optional_str(data, "name", theme_dir, max_len=_MAX_SHORT_FIELD_LEN) or theme_dir.name,
        author=_optional_str(data, "author", theme_dir, max_len=_MAX_SHORT_FIELD_LEN),
        description=_optional_str(data, "description", theme_dir, max_len=_MAX_DESC_LEN),
        version=_optional_str(data, "version", theme_dir, max_len=40),
        wallpapers=tuple(list_wallpaper_files(theme_dir)),
    )


def parse_colors(data: Mapping[str, object], *, context: str) -> ThemeColors:
    """Validate a descriptor ``colors`` object into ThemeColors."""
    allowed = {key for key, _ in COLOR_KEYS}
    _reject_unknown_keys(data, allowed=allowed, context=f"{context} colors")
    missing = [key for key, _ in COLOR_KEYS if key not in data]
    if missing:
        joined = ", ".join(sorted(missing))
        raise ThemeValidationError(f"{context}: missing required color keys: {joined}")

    values: dict[str, str] = {}
    for key, field_name in COLOR_KEYS:
        value = data.get(key)
        if not isinstance(value, str) or not is_valid_hex_color(value.strip()):
            raise ThemeValidationError(f"{context}: color {key!r} has invalid value {value!r}")
        values[field_name] = value.strip()
    return ThemeColors(**values)


def list_wallpaper_files(theme_dir: Path) -> list[Path]:
    """Return wallpaper images of a theme, ordered by file name."""
    wallpapers_dir = theme_dir / WALLPAPERS_DIR
    if not wallpapers_dir.is_dir():
        return []
    try:
        entries = sorted(wallpapers_dir.iterdir(), key=lambda path: path.name.lower())
    except OSError:
        return []
    return [
        path
        for path in entries
        if path.suffix.lower() in IMAGE_EXTENSIONS and path.is_file()
    ]


def _load_json(path: Path, *, max_bytes: int) -> Mapping[str, object]:
    content = _read_text_limited(path, max_bytes=max_bytes)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ThemeValidationError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ThemeValidationError(f"Expected JSON object in {path}")
    return data


def _optional_str(data: Mapping[str, object], key: str, theme_dir: Path, *, max_len: int) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ThemeValidationError(f"{theme_dir}: field {key!r} must be a string")
    cleaned = value.strip()
    if len(cleaned) > max_len:
        raise ThemeValidationError(f"{theme_dir}: field {key!r} exceeds max length {max_len}")
    return cleaned


def _reject_unknown_keys(
    data: Mapping[str, object],
    *,
    allowed: set[str],
    context: str,
) -> None:
    unknown = sorted(key for key in data.keys() if key not in allowed)
    if unknown:
        joined = ", ".join(unknown)
        raise ThemeValidationError(f"{context}: unsupported keys found: {joined}")


def _read_text_limited(path: Path, *, max_bytes: int) -> str:
    try:
        size = path.stat().st_size
    except OSError as exc:
        raise ThemeValidationError(f"Unable to stat {path}: {exc}") from exc
    if size > max_bytes:
        raise ThemeValidationError(f"{path}: file exceeds max size ({max_bytes} bytes)")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ThemeValidationError(f"Unable to read {path}: {exc}") from exc
