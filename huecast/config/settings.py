"""Application settings via QSettings."""

from __future__ import annotations

import os
from pathlib import Path
import sys

from PySide6.QtCore import QSettings

DATA_DIR_ENV = "HUECAST_DATA_DIR"
MAX_RECENT_THEMES = 10


class AppSettings:
    """Wraps QSettings for persistent app configuration."""

    def __init__(self, qsettings: QSettings | None = None) -> None:
        self._qs = qsettings if qsettings is not None else QSettings("Huecast", "Huecast")

    # -- paths --

    @property
    def data_dir(self) -> Path:
        env_value = os.environ.get(DATA_DIR_ENV, "").strip()
        if env_value:
            return Path(env_value).expanduser()
        raw = self._qs.value("paths/data_dir", "", type=str)
        value = (raw or "").strip()
        if value:
            return Path(value).expanduser()
        return self._default_data_dir()

    @data_dir.setter
    def data_dir(self, value: str | Path) -> None:
        self._qs.setValue("paths/data_dir", str(value).strip())

    @property
    def themes_dir(self) -> Path:
        return self.data_dir / "themes"

    @property
    def custom_themes_dir(self) -> Path:
        return self.data_dir / "custom-themes"

    @property
    def current_dir(self) -> Path:
        return self.data_dir / "current"

    @property
    def staging_dir(self) -> Path:
        return self.data_dir / "staging"

    @property
    def state_path(self) -> Path:
        return self.data_dir / "state.json"

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"

    # -- notification --

    @property
    def enabled_apps(self) -> list[str]:
        return self._string_list("apps/enabled")

    @enabled_apps.setter
    def enabled_apps(self, value: list[str]) -> None:
        cleaned = [item.strip().lower() for item in value if isinstance(item, str) and item.strip()]
        self._qs.setValue("apps/enabled", cleaned)

    def is_app_enabled(self, name: str) -> bool:
        enabled = self.enabled_apps
        if not enabled:
            return True
        return name.lower() in enabled

    @property
    def hook_script(self) -> str:
        raw = self._qs.value("apps/hook_script", "", type=str)
        return (raw or "").strip()

    @hook_script.setter
    def hook_script(self, value: str) -> None:
        self._qs.setValue("apps/hook_script", (value or "").strip())

    # -- themes --

    @property
    def recent_themes(self) -> list[str]:
        return self._string_list("themes/recent")[:MAX_RECENT_THEMES]

    @recent_themes.setter
    def recent_themes(self, value: list[str]) -> None:
        cleaned: list[str] = []
        for item in value:
            if isinstance(item, str) and item.strip() and item.strip() not in cleaned:
                cleaned.append(item.strip())
        self._qs.setValue("themes/recent", cleaned[:MAX_RECENT_THEMES])

    def record_recent_theme(self, name: str) -> None:
        recent = [item for item in self.recent_themes if item != name]
        recent.insert(0, name)
        self.recent_themes = recent

    # -- wallpaper --

    @property
    def desktoppr_path(self) -> str:
        raw = self._qs.value("wallpaper/desktoppr_path", "", type=str)
        return (raw or "").strip()

    @desktoppr_path.setter
    def desktoppr_path(self, value: str) -> None:
        self._qs.setValue("wallpaper/desktoppr_path", (value or "").strip())

    # -- logging --

    @property
    def debug_logging(self) -> bool:
        return bool(self._qs.value("logging/debug", False, type=bool))

    @debug_logging.setter
    def debug_logging(self, value: bool) -> None:
        self._qs.setValue("logging/debug", bool(value))

    # -- helpers --

    def sync(self) -> None:
        self._qs.sync()

    def _string_list(self, key: str) -> list[str]:
        raw = self._qs.value(key, [])
        if raw is None:
            return []
        # INI-backed settings hand back a bare string for one-element lists
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, (list, tuple)):
            return []
        return [item.strip() for item in raw if isinstance(item, str) and item.strip()]

    @staticmethod
    def _default_data_dir() -> Path:
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / "Huecast"
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
        return base / "huecast"
