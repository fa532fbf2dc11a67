"""Workers for theme and wallpaper applies."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from huecast.errors import HuecastError, format_error_for_user
from huecast.workers.base_worker import BaseWorker

if TYPE_CHECKING:
    from huecast.core.orchestrator import ThemeOrchestrator

logger = logging.getLogger(__name__)


class ApplyThemeWorker(BaseWorker):
    """Applies a theme in a background thread.

    Emits ``finished(ApplyResult)`` when the apply committed or failed to
    commit, ``cancelled`` when it stopped at a checkpoint, and ``error`` only
    when the theme could not be resolved or something unexpected broke.
    """

    def __init__(
        self,
        orchestrator: ThemeOrchestrator,
        theme_name: str,
        *,
        skip_notify: bool = False,
        skip_wallpaper: bool = False,
        display_index: int | None = None,
    ) -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._theme_name = theme_name
        self._skip_notify = skip_notify
        self._skip_wallpaper = skip_wallpaper
        self._display_index = display_index

    def run(self) -> None:
        self.started.emit()
        try:
            result = self._orchestrator.apply_theme(
                self._theme_name,
                skip_notify=self._skip_notify,
                skip_wallpaper=self._skip_wallpaper,
                display_index=self._display_index,
                on_log=self.log.emit,
                progress_cb=lambda cur, tot, msg: self.progress.emit(cur, tot, msg),
                cancel_event=self._cancel_event,
            )
        except HuecastError as e:
            self.error.emit(format_error_for_user(e))
            return
        except Exception as e:
            logger.exception("theme apply crashed")
            self.error.emit(format_error_for_user(e))
            return

        if result.cancelled:
            self.cancelled.emit()
        else:
            self.finished.emit(result)


class ApplyWallpaperWorker(BaseWorker):
    """Applies a single wallpaper file in a background thread."""

    def __init__(
        self,
        orchestrator: ThemeOrchestrator,
        wallpaper: str | Path,
        display_index: int | None = None,
    ) -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._wallpaper = wallpaper
        self._display_index = display_index

    def run(self) -> None:
        self.started.emit()
        try:
            report = self._orchestrator.apply_wallpaper(
                self._wallpaper,
                self._display_index,
                on_log=self.log.emit,
            )
            self.finished.emit(report)
        except HuecastError as e:
            self.error.emit(format_error_for_user(e))
        except Exception as e:
            logger.exception("wallpaper apply crashed")
            self.error.emit(format_error_for_user(e))
