"""User hook script run after a theme apply."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import subprocess
from typing import Callable

logger = logging.getLogger(__name__)

HOOK_TIMEOUT_SECONDS = 30


def run_hook_script(
    script: str | Path,
    theme_name: str,
    on_log: Callable[[str], None] | None = None,
) -> bool:
    """Run ``script theme_name`` without a shell. Returns False on any failure."""
    path = Path(script).expanduser()

    def fail(message: str) -> bool:
        logger.warning("hook script %s: %s", path, message)
        if on_log:
            on_log(f"Hook script failed: {message}")
        return False

    if not path.is_file():
        return fail("not found")
    if not os.access(path, os.X_OK):
        return fail("not executable")

    try:
        subprocess.run(
            [str(path), theme_name],
            check=True,
            capture_output=True,
            text=True,
            timeout=HOOK_TIMEOUT_SECONDS,
        )
    except subprocess.CalledProcessError as exc:
        return fail(f"exit {exc.returncode}")
    except subprocess.TimeoutExpired:
        return fail(f"timed out after {HOOK_TIMEOUT_SECONDS}s")
    except OSError as exc:
        return fail(str(exc))

    logger.info("hook script %s ran for %s", path, theme_name)
    if on_log:
        on_log("Hook script executed")
    return True
