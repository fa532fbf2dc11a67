"""File and process helpers shared by adapter notifiers."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import shutil
import subprocess
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)

RELOAD_TIMEOUT_SECONDS = 5


def copy_artifact(source: Path, dest: Path) -> None:
    """Copy a staged file into place via a temp file so readers never see half a file."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest.with_name(f".{dest.name}.{os.getpid()}.tmp")
    try:
        shutil.copyfile(source, tmp)
        os.replace(tmp, dest)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def touch(path: Path) -> None:
    """Bump mtime so file watchers pick up a change."""
    os.utime(path, None)


def first_existing(paths: Iterable[Path]) -> Path | None:
    for path in paths:
        if path.exists():
            return path
    return None


def run_reload_command(args: Sequence[str], *, timeout: float = RELOAD_TIMEOUT_SECONDS) -> None:
    """Run a reload command without a shell.

    Raises:
        subprocess.CalledProcessError: non-zero exit.
        subprocess.TimeoutExpired: command hung.
        OSError: executable missing.
    """
    logger.debug("running reload command: %s", list(args))
    subprocess.run(
        list(args),
        check=True,
        capture_output=True,
        text=True,
        timeout=timeout,
    )


def run_detached_command(args: Sequence[str], *, timeout: float = RELOAD_TIMEOUT_SECONDS) -> None:
    """Run a command that may leave a daemon running behind it.

    Output is discarded so a backgrounded child never holds our pipes open,
    and the child starts its own session so it outlives the apply.

    Raises:
        subprocess.CalledProcessError: non-zero exit.
        subprocess.TimeoutExpired: command hung.
        OSError: executable missing.
    """
    logger.debug("running detached command: %s", list(args))
    subprocess.run(
        list(args),
        check=True,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
        timeout=timeout,
    )
