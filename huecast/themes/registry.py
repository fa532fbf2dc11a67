"""Theme discovery across bundled and custom theme roots."""

from __future__ import annotations

from pathlib import Path

from huecast.themes.loader import load_theme
from huecast.themes.models import Theme, ThemeSummary, ThemeValidationError

_MAX_THEME_DIR_CANDIDATES = 512


class ThemeRegistry:
    """Loads theme directories from bundled and custom roots.

    Lookups go to disk every time so themes imported by another process are
    visible without a reload. Names match case-insensitively and a bundled
    theme shadows a custom theme of the same name.
    """

    def __init__(self, bundled_root: Path, custom_root: Path) -> None:
        self._bundled_root = bundled_root
        self._custom_root = custom_root
        self._load_errors: list[str] = []

    @property
    def bundled_root(self) -> Path:
        return self._bundled_root

    @property
    def custom_root(self) -> Path:
        return self._custom_root

    def find_theme_dir(self, name: str) -> tuple[Path, bool] | None:
        """Return ``(directory, is_custom)`` for ``name`` or None."""
        wanted = name.strip().lower()
        if not wanted:
            return None
        for root, is_custom in ((self._bundled_root, False), (self._custom_root, True)):
            for candidate in self._candidate_dirs(root):
                if candidate.name.lower() == wanted:
                    return candidate, is_custom
        return None

    def get_theme(self, name: str) -> Theme | None:
        """Load the named theme.

        Raises:
            ThemeValidationError: the directory exists but is malformed.
        """
        found = self.find_theme_dir(name)
        if found is None:
            return None
        theme_dir, is_custom = found
        return load_theme(theme_dir, is_custom=is_custom)

    def list_themes(self) -> list[ThemeSummary]:
        self._load_errors = []
        rows: list[ThemeSummary] = []
        seen: set[str] = set()
        for root, is_custom in ((self._bundled_root, False), (self._custom_root, True)):
            for theme_dir in self._candidate_dirs(root, record_errors=True):
                key = theme_dir.name.lower()
                if key in seen:
                    self._load_errors.append(
                        f"Custom theme {theme_dir.name!r} is shadowed by a bundled theme; skipping."
                    )
                    continue
                seen.add(key)
                try:
                    theme = load_theme(theme_dir, is_custom=is_custom)
                except ThemeValidationError as exc:
                    self._load_errors.append(str(exc))
                    continue
                rows.append(
                    ThemeSummary(
                        name=theme.name,
                        display_name=theme.display_name,
                        author=theme.author,
                        description=theme.description,
                        is_custom=theme.is_custom,
                        is_light=theme.is_light,
                        path=theme.path,
                        wallpaper_count=len(theme.wallpapers),
                    )
                )
        return sorted(rows, key=lambda row: (1 if row.is_custom else 0, row.name.lower()))

    def load_errors(self) -> list[str]:
        return list(self._load_errors)

    def _candidate_dirs(self, root: Path, *, record_errors: bool = False) -> list[Path]:
        if not root.exists():
            return []
        try:
            candidates = sorted(path for path in root.iterdir() if path.is_dir())
        except OSError as exc:
            if record_errors:
                self._load_errors.append(f"Failed to list themes in {root}: {exc}")
            return []
        if len(candidates) > _MAX_THEME_DIR_CANDIDATES:
            if record_errors:
                self._load_errors.append(
                    f"Theme directory limit exceeded in {root}; "
                    f"only first {_MAX_THEME_DIR_CANDIDATES} folders were scanned."
                )
            candidates = candidates[:_MAX_THEME_DIR_CANDIDATES]
        return candidates
