"""Desktop wallpaper application.

Two strategies run on every apply, in order, regardless of each other's
outcome:

1. ``desktoppr`` (NSWorkspace API). Handles multiple monitors. Skipped when
   the binary cannot be found.
2. AppleScript through ``osascript`` (System Events). Reaches every Space.

The apply succeeds when any attempted strategy succeeds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
import subprocess
from typing import Callable, Sequence

from huecast.errors import ErrorCode, WallpaperError
from huecast.runtime_paths import bundled_binary

logger = logging.getLogger(__name__)

OSASCRIPT = "/usr/bin/osascript"
COMMAND_TIMEOUT_SECONDS = 30

_SYSTEM_DESKTOPPR_PATHS = (
    Path("/usr/local/bin/desktoppr"),
    Path("/opt/homebrew/bin/desktoppr"),
)

CommandRunner = Callable[[Sequence[str]], None]
LogCallback = Callable[[str], None]


def _run_command(args: Sequence[str]) -> None:
    subprocess.run(
        list(args),
        check=True,
        capture_output=True,
        text=True,
        timeout=COMMAND_TIMEOUT_SECONDS,
    )


def _describe_failure(exc: Exception) -> str:
    if isinstance(exc, subprocess.CalledProcessError):
        stderr = (exc.stderr or "").strip() if isinstance(exc.stderr, str) else ""
        if stderr:
            return f"exit {exc.returncode}: {stderr}"
        return f"exit {exc.returncode}"
    if isinstance(exc, subprocess.TimeoutExpired):
        return f"timed out after {exc.timeout}s"
    return str(exc) or type(exc).__name__


def find_desktoppr(explicit_path: str | Path | None = None) -> Path | None:
    """Locate desktoppr: explicit path, bundled copy, then system installs."""
    if explicit_path:
        explicit = Path(explicit_path).expanduser()
        if explicit.exists():
            return explicit
    for candidate in (bundled_binary("desktoppr"), *_SYSTEM_DESKTOPPR_PATHS):
        if candidate.exists():
            return candidate
    return None


def escape_applescript_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def desktoppr_args(binary: Path, wallpaper: Path, display_index: int | None) -> list[str]:
    """desktoppr numbers screens from 0; ``display_index`` is 1-based."""
    if display_index is None:
        return [str(binary), str(wallpaper)]
    return [str(binary), str(display_index - 1), str(wallpaper)]


def applescript_args(wallpaper: Path, display_index: int | None) -> list[str]:
    escaped = escape_applescript_string(str(wallpaper))
    if display_index is None:
        script = (
            'tell application "System Events" to tell every desktop '
            f'to set picture to "{escaped}"'
        )
    else:
        script = (
            'tell application "System Events" to set picture of '
            f'desktop {display_index} to "{escaped}"'
        )
    return [OSASCRIPT, "-e", script]


@dataclass
class WallpaperReport:
    """Per-strategy outcome of one apply."""

    path: Path
    desktoppr_attempted: bool = False
    desktoppr_ok: bool = False
    applescript_ok: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.desktoppr_ok or self.applescript_ok


class WallpaperApplier:
    """Runs both wallpaper strategies and aggregates the outcome."""

    def __init__(
        self,
        desktoppr_path: str | Path | None = None,
        run_command: CommandRunner | None = None,
    ) -> None:
        self._desktoppr_path = desktoppr_path
        self._run = run_command or _run_command

    def apply(
        self,
        wallpaper: Path,
        display_index: int | None = None,
        on_log: LogCallback | None = None,
    ) -> WallpaperReport:
        """Apply ``wallpaper`` to one display (1-based) or to all of them.

        Raises:
            ValueError: ``display_index`` is below 1.
            WallpaperError: no attempted strategy succeeded. The message
                carries every strategy's error.
        """
        if display_index is not None and display_index < 1:
            raise ValueError(f"display_index is 1-based, got {display_index}")

        def log(message: str) -> None:
            logger.info("%s", message)
            if on_log:
                on_log(message)

        report = WallpaperReport(path=wallpaper)

        binary = find_desktoppr(self._desktoppr_path)
        if binary is None:
            log("desktoppr not found, skipping")
        else:
            report.desktoppr_attempted = True
            try:
                self._run(desktoppr_args(binary, wallpaper, display_index))
                report.desktoppr_ok = True
                log("desktoppr applied wallpaper")
            except (OSError, subprocess.SubprocessError) as exc:
                message = _describe_failure(exc)
                report.errors.append(f"desktoppr: {message}")
                logger.warning("desktoppr failed: %s", message)
                if on_log:
                    on_log(f"desktoppr failed: {message}")

        try:
            self._run(applescript_args(wallpaper, display_index))
            report.applescript_ok = True
            log("AppleScript applied wallpaper")
        except (OSError, subprocess.SubprocessError) as exc:
            message = _describe_failure(exc)
            report.errors.append(f"AppleScript: {message}")
            logger.warning("AppleScript failed: %s", message)
            if on_log:
                on_log(f"AppleScript failed: {message}")

        if not report.success:
            if not report.desktoppr_attempted:
                report.errors.insert(0, "desktoppr: not found")
            raise WallpaperError(
                ErrorCode.WALLPAPER_APPLY_FAILED,
                message=f"Failed to apply wallpaper: {'; '.join(report.errors)}",
                path=wallpaper,
                details={"errors": list(report.errors)},
            )
        return report
