"""Read-only status snapshot for shells to render."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from huecast.apps.detection import detect_apps
from huecast.apps.registry import AdapterRegistry
from huecast.config.settings import AppSettings
from huecast.core.state import StateStore
from huecast.themes.registry import ThemeRegistry


@dataclass(frozen=True, slots=True)
class StatusReport:
    current_theme: str
    current_wallpaper: str | None
    last_switched: int
    data_dir: Path
    installed_apps: list[str] = field(default_factory=list)
    integrated_apps: list[str] = field(default_factory=list)
    bundled_theme_count: int = 0
    custom_theme_count: int = 0
    theme_errors: list[str] = field(default_factory=list)


def collect_status(
    settings: AppSettings,
    themes: ThemeRegistry,
    adapters: AdapterRegistry,
    state_store: StateStore | None = None,
) -> StatusReport:
    store = state_store or StateStore(settings.state_path)
    state = store.load()
    apps = detect_apps(adapters)
    summaries = themes.list_themes()
    return StatusReport(
        current_theme=state.current_theme,
        current_wallpaper=state.current_wallpaper,
        last_switched=state.last_switched,
        data_dir=settings.data_dir,
        installed_apps=[app.name for app in apps if app.is_installed],
        integrated_apps=[app.name for app in apps if app.has_integration],
        bundled_theme_count=sum(1 for summary in summaries if not summary.is_custom),
        custom_theme_count=sum(1 for summary in summaries if summary.is_custom),
        theme_errors=themes.load_errors(),
    )
