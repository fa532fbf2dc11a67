"""Theme application: generate, notify, wallpaper, commit.

One apply runs through ``RESOLVING -> GENERATING -> NOTIFYING -> WALLPAPER ->
COMMITTING``. Only resolution failures raise; every later failure is
recorded on the returned ``ApplyResult`` and the apply keeps going.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
import logging
from pathlib import Path
import threading
from typing import Callable

from huecast.apps.adapter import AppAdapter, Capability, LogCallback
from huecast.apps.registry import AdapterRegistry
from huecast.config.settings import AppSettings
from huecast.core.hooks import run_hook_script
from huecast.core.state import StateStore, now_millis
from huecast.core.symlinks import repoint_symlink
from huecast.core.wallpaper import WallpaperApplier, WallpaperReport
from huecast.errors import (
    AdapterError,
    CommitError,
    ErrorCode,
    HuecastError,
    ResolutionError,
    WallpaperError,
)
from huecast.themes.models import Theme, ThemeValidationError
from huecast.themes.registry import ThemeRegistry

logger = logging.getLogger(__name__)

MAX_NOTIFY_WORKERS = 4
THEME_LINK_NAME = "theme"
WALLPAPER_LINK_NAME = "wallpaper"

ProgressCallback = Callable[[int, int, str], None]

# Serialises applies across every orchestrator in the process.
_APPLY_LOCK = threading.Lock()


@dataclass(frozen=True, slots=True)
class AppFailure:
    name: str
    reason: str
    code: ErrorCode = ErrorCode.ADAPTER_NOTIFY_FAILED

    @classmethod
    def from_error(cls, name: str, error: HuecastError) -> AppFailure:
        return cls(name, error.message, error.code)


@dataclass(frozen=True, slots=True)
class WallpaperOutcome:
    status: str  # applied, skipped, failed
    path: Path | None = None
    error: str = ""


@dataclass
class ApplyResult:
    """Everything one apply did, including what went wrong."""

    previous_theme: str | None
    current_theme: str | None
    notified_apps: list[str] = field(default_factory=list)
    failures: list[AppFailure] = field(default_factory=list)
    generated: list[str] = field(default_factory=list)
    wallpaper: WallpaperOutcome = field(default_factory=lambda: WallpaperOutcome("skipped"))
    hook_executed: bool = False
    commit_error: CommitError | None = None
    cancelled: bool = False

    @property
    def success(self) -> bool:
        return self.commit_error is None and not self.cancelled

    @property
    def failed_apps(self) -> list[str]:
        return [failure.name for failure in self.failures]


class ThemeOrchestrator:
    """Applies themes across every registered app."""

    def __init__(
        self,
        settings: AppSettings,
        themes: ThemeRegistry,
        adapters: AdapterRegistry,
        state_store: StateStore | None = None,
        wallpaper_applier: WallpaperApplier | None = None,
        max_workers: int = MAX_NOTIFY_WORKERS,
    ) -> None:
        self._settings = settings
        self._themes = themes
        self._adapters = adapters
        self._state = state_store or StateStore(settings.state_path)
        self._wallpaper = wallpaper_applier or WallpaperApplier(settings.desktoppr_path or None)
        self._max_workers = max(1, max_workers)

    @property
    def state_store(self) -> StateStore:
        return self._state

    def current_theme_link(self) -> Path:
        return self._settings.current_dir / THEME_LINK_NAME

    def current_wallpaper_link(self) -> Path:
        return self._settings.current_dir / WALLPAPER_LINK_NAME

    # -- resolution --

    def resolve_theme(self, name: str) -> Theme:
        """Find and load ``name`` from bundled then custom themes.

        Raises:
            ResolutionError: not found, or the theme directory is invalid.
        """
        try:
            theme = self._themes.get_theme(name)
        except ThemeValidationError as exc:
            raise ResolutionError(
                ErrorCode.THEME_INVALID,
                message=str(exc),
                details={"theme": name},
            ) from exc
        if theme is None:
            raise ResolutionError(
                ErrorCode.THEME_NOT_FOUND,
                message=f'Theme "{name}" not found',
                details={"theme": name},
            )
        return theme

    # -- apply --

    def apply_theme(
        self,
        name: str,
        *,
        skip_notify: bool = False,
        skip_wallpaper: bool = False,
        display_index: int | None = None,
        on_log: LogCallback | None = None,
        progress_cb: ProgressCallback | None = None,
        cancel_event: threading.Event | None = None,
    ) -> ApplyResult:
        """Apply the named theme.

        Raises:
            ResolutionError: the theme could not be resolved. Nothing was changed.
        """
        with _APPLY_LOCK:
            return self._apply_locked(
                name,
                skip_notify=skip_notify,
                skip_wallpaper=skip_wallpaper,
                display_index=display_index,
                on_log=on_log,
                progress_cb=progress_cb,
                cancel_event=cancel_event,
            )

    def _apply_locked(
        self,
        name: str,
        *,
        skip_notify: bool,
        skip_wallpaper: bool,
        display_index: int | None,
        on_log: LogCallback | None,
        progress_cb: ProgressCallback | None,
        cancel_event: threading.Event | None,
    ) -> ApplyResult:
        def log(message: str) -> None:
            logger.info("%s", message)
            if on_log:
                on_log(message)

        def cancelled() -> bool:
            return cancel_event is not None and cancel_event.is_set()

        theme = self.resolve_theme(name)
        previous = self._state.peek_current_theme()
        result = ApplyResult(previous_theme=previous, current_theme=previous)
        log(f"Applying theme {theme.name}")

        generators = self._adapters.all_with_capability(Capability.GENERATE)
        notifiers: list[AppAdapter] = []
        if not skip_notify:
            notifiers = [
                adapter
                for adapter in self._adapters.all_with_capability(Capability.NOTIFY)
                if self._settings.is_app_enabled(adapter.name)
            ]
        total = len(generators) + len(notifiers) + 2
        step = 0

        def advance(message: str) -> None:
            nonlocal step
            step += 1
            if progress_cb:
                progress_cb(step, total, message)

        # GENERATING
        staging = self._settings.staging_dir / theme.name
        generation_failed: set[str] = set()
        for adapter in generators:
            if cancelled():
                return self._cancelled(result, log)
            advance(f"Generating {adapter.display_name}")
            failure = self._generate_one(adapter, theme, staging)
            if failure is None:
                result.generated.append(adapter.name)
            else:
                generation_failed.add(adapter.name)
                result.failures.append(failure)
                log(f"{adapter.display_name}: {failure.reason}")

        # NOTIFYING
        notifiers = [adapter for adapter in notifiers if adapter.name not in generation_failed]
        total = len(generators) + len(notifiers) + 2
        if notifiers:
            if cancelled():
                return self._cancelled(result, log)
            notified, failures = self._notify_all(notifiers, staging, log, cancel_event, advance)
            result.notified_apps.extend(notified)
            result.failures.extend(failures)
            if cancelled():
                return self._cancelled(result, log)

        hook = self._settings.hook_script
        if hook and not skip_notify:
            result.hook_executed = run_hook_script(hook, theme.name, on_log)
            if not result.hook_executed:
                result.failures.append(AppFailure("hook", "hook script failed", ErrorCode.HOOK_FAILED))

        # WALLPAPER
        if cancelled():
            return self._cancelled(result, log)
        advance("Applying wallpaper")
        if skip_wallpaper or not theme.wallpapers:
            log("No wallpaper selected, skipping")
        else:
            result.wallpaper = self._apply_theme_wallpaper(theme.wallpapers[0], display_index, on_log)

        # COMMITTING: not interruptible from here on.
        if cancelled():
            return self._cancelled(result, log)
        advance("Committing")
        self._commit(theme, result, log)

        result.generated.sort()
        result.notified_apps.sort()
        result.failures.sort(key=lambda failure: failure.name)
        return result

    def _generate_one(self, adapter: AppAdapter, theme: Theme, staging: Path) -> AppFailure | None:
        try:
            output = adapter.generate_config(theme.colors)
            staging.mkdir(parents=True, exist_ok=True)
            (staging / output.file_name).write_text(output.content, encoding="utf-8")
        except Exception as exc:
            logger.exception("config generation failed for %s", adapter.name)
            error = AdapterError(
                ErrorCode.ADAPTER_GENERATE_FAILED,
                message=str(exc) or type(exc).__name__,
                details={"app": adapter.name},
            )
            return AppFailure.from_error(adapter.name, error)
        return None

    def _notify_all(
        self,
        notifiers: list[AppAdapter],
        staging: Path,
        log: LogCallback,
        cancel_event: threading.Event | None,
        advance: Callable[[str], None],
    ) -> tuple[list[str], list[AppFailure]]:
        notified: list[str] = []
        failures: list[AppFailure] = []

        def run(adapter: AppAdapter) -> bool | None:
            if cancel_event is not None and cancel_event.is_set():
                return None
            return adapter.notify(staging, log)

        workers = min(self._max_workers, len(notifiers))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {executor.submit(run, adapter): adapter for adapter in notifiers}
            for future in as_completed(futures):
                adapter = futures[future]
                advance(f"Notified {adapter.display_name}")
                try:
                    ok = future.result()
                except Exception as exc:
                    logger.warning("notify raised for %s: %s", adapter.name, exc)
                    error = AdapterError(
                        ErrorCode.ADAPTER_NOTIFY_FAILED,
                        message=str(exc) or type(exc).__name__,
                        details={"app": adapter.name},
                    )
                    failures.append(AppFailure.from_error(adapter.name, error))
                    continue
                if ok is None:
                    failures.append(AppFailure(adapter.name, "cancelled", ErrorCode.OPERATION_CANCELLED))
                    continue
                if ok:
                    notified.append(adapter.name)
                else:
                    logger.warning("notify reported failure for %s", adapter.name)
                    failures.append(AppFailure(adapter.name, "notification failed"))
        return sorted(notified), sorted(failures, key=lambda failure: failure.name)

    def _apply_theme_wallpaper(
        self,
        wallpaper: Path,
        display_index: int | None,
        on_log: LogCallback | None,
    ) -> WallpaperOutcome:
        try:
            self._wallpaper.apply(wallpaper, display_index, on_log)
        except (WallpaperError, ValueError) as exc:
            logger.warning("wallpaper failed: %s", exc)
            return WallpaperOutcome("failed", wallpaper, str(exc))
        try:
            repoint_symlink(self.current_wallpaper_link(), wallpaper.resolve())
        except CommitError as exc:
            logger.warning("wallpaper link not updated: %s", exc)
            return WallpaperOutcome("applied", wallpaper, str(exc))
        return WallpaperOutcome("applied", wallpaper)

    def _commit(self, theme: Theme, result: ApplyResult, log: LogCallback) -> None:
        try:
            repoint_symlink(self.current_theme_link(), theme.path.resolve())
        except CommitError as exc:
            logger.error("commit failed: %s", exc)
            result.commit_error = exc
            return
        result.current_theme = theme.name

        changes: dict = {"current_theme": theme.name, "last_switched": now_millis()}
        if result.wallpaper.status == "applied" and result.wallpaper.path is not None:
            changes["current_wallpaper"] = str(result.wallpaper.path)
        try:
            self._state.update(**changes)
        except CommitError as exc:
            # The link already points at the new theme; it is not rolled back.
            logger.error("state write failed after link commit: %s", exc)
            result.commit_error = exc
            return

        try:
            self._settings.record_recent_theme(theme.name)
        except Exception as exc:
            logger.warning("could not record recent theme: %s", exc)
        log(f"Theme {theme.name} applied")

    def _cancelled(self, result: ApplyResult, log: LogCallback) -> ApplyResult:
        log("Apply cancelled before commit")
        result.cancelled = True
        result.current_theme = result.previous_theme
        result.generated.sort()
        result.notified_apps.sort()
        result.failures.sort(key=lambda failure: failure.name)
        return result

    # -- standalone wallpaper --

    def apply_wallpaper(
        self,
        wallpaper: str | Path,
        display_index: int | None = None,
        on_log: LogCallback | None = None,
    ) -> WallpaperReport:
        """Apply a wallpaper outside of a theme switch and record it.

        Raises:
            ResolutionError: the file does not exist.
            WallpaperError: every attempted strategy failed.
            CommitError: the wallpaper link or state could not be written.
        """
        path = Path(wallpaper).expanduser()
        if not path.is_file():
            raise ResolutionError(
                ErrorCode.WALLPAPER_NOT_FOUND,
                message=f"Wallpaper not found: {path}",
                path=path,
            )
        with _APPLY_LOCK:
            report = self._wallpaper.apply(path, display_index, on_log)
            repoint_symlink(self.current_wallpaper_link(), path.resolve())
            self._state.update(current_wallpaper=str(path))
        return report
