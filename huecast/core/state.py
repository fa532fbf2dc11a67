"""Persisted application state: current theme, wallpaper and switch time."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
import time
from typing import Any

from huecast.errors import CommitError, ErrorCode
from huecast.themes.constants import DEFAULT_THEME_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ApplicationState:
    current_theme: str = DEFAULT_THEME_NAME
    current_wallpaper: str | None = None
    last_switched: int = 0

    def to_json_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "currentTheme": self.current_theme,
            "lastSwitched": self.last_switched,
        }
        if self.current_wallpaper:
            data["currentWallpaper"] = self.current_wallpaper
        return data

    @classmethod
    def from_json_dict(cls, data: Any) -> ApplicationState:
        """Merge ``data`` over defaults, dropping fields with the wrong type."""
        defaults = cls()
        if not isinstance(data, dict):
            return defaults

        theme = data.get("currentTheme")
        if not isinstance(theme, str) or not theme.strip():
            theme = defaults.current_theme

        wallpaper = data.get("currentWallpaper")
        if not isinstance(wallpaper, str) or not wallpaper.strip():
            wallpaper = None

        switched = data.get("lastSwitched")
        if isinstance(switched, bool) or not isinstance(switched, (int, float)):
            switched = defaults.last_switched

        return cls(current_theme=theme.strip(), current_wallpaper=wallpaper, last_switched=int(switched))


def now_millis() -> int:
    return int(time.time() * 1000)


class StateStore:
    """JSON-backed ``ApplicationState`` store.

    Reads never raise: a missing, unreadable or corrupt file yields defaults.
    Writes go through a temp file and ``os.replace``.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def _read_raw(self) -> Any:
        try:
            return json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as exc:
            logger.warning("state file %s unreadable, using defaults: %s", self._path, exc)
            return None

    def load(self) -> ApplicationState:
        return ApplicationState.from_json_dict(self._read_raw())

    def peek_current_theme(self) -> str | None:
        """Recorded theme name, or None when nothing valid has been recorded."""
        data = self._read_raw()
        if not isinstance(data, dict):
            return None
        theme = data.get("currentTheme")
        if isinstance(theme, str) and theme.strip():
            return theme.strip()
        return None

    def save(self, state: ApplicationState) -> None:
        """Persist ``state``.

        Raises:
            CommitError: the file could not be written.
        """
        tmp = self._path.with_name(f".{self._path.name}.{os.getpid()}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(state.to_json_dict(), indent=2) + "\n", encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as exc:
            tmp.unlink(missing_ok=True)
            raise CommitError(
                ErrorCode.STATE_WRITE_FAILED,
                message=f"Failed to write state: {exc}",
                path=self._path,
            ) from exc

    def update(self, **changes: Any) -> ApplicationState:
        """Load, apply ``changes`` and save in one write."""
        current = self.load()
        updated = ApplicationState(
            current_theme=changes.get("current_theme", current.current_theme),
            current_wallpaper=changes.get("current_wallpaper", current.current_wallpaper),
            last_switched=changes.get("last_switched", current.last_switched),
        )
        self.save(updated)
        return updated
