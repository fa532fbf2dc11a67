"""Composition root: logging and the default orchestrator."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from huecast.apps.adapters import build_default_registry
from huecast.config.settings import AppSettings
from huecast.core.orchestrator import ThemeOrchestrator
from huecast.core.state import StateStore
from huecast.core.wallpaper import WallpaperApplier
from huecast.runtime_paths import is_frozen, package_root
from huecast.themes.registry import ThemeRegistry

LOG_FILE_NAME = "huecast.log"


def configure_logging(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("huecast")
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG if settings.debug_logging else logging.INFO)
    log_dir = settings.log_dir
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def build_orchestrator(
    settings: AppSettings | None = None,
    home: Path | None = None,
) -> ThemeOrchestrator:
    """Wire settings, theme roots, adapters and stores into an orchestrator."""
    settings = settings or AppSettings()
    logger = configure_logging(settings)
    logger.info("startup mode frozen=%s package_root=%s", is_frozen(), package_root())

    data_dir = settings.data_dir
    themes = ThemeRegistry(settings.themes_dir, settings.custom_themes_dir)
    if not themes.bundled_root.exists():
        logger.warning("bundled theme root missing at %s", themes.bundled_root)

    adapters = build_default_registry(home=home, data_dir=data_dir)
    return ThemeOrchestrator(
        settings,
        themes,
        adapters,
        state_store=StateStore(settings.state_path),
        wallpaper_applier=WallpaperApplier(settings.desktoppr_path or None),
    )
