"""Atomic symlink repointing."""

from __future__ import annotations

import logging
import os
from pathlib import Path
import uuid

from huecast.errors import CommitError, ErrorCode

logger = logging.getLogger(__name__)


def _temp_link_path(link: Path) -> Path:
    return link.with_name(f".{link.name}.{uuid.uuid4().hex[:8]}.tmp")


def repoint_symlink(link: Path, target: Path) -> None:
    """Point ``link`` at ``target`` without ever removing ``link`` first.

    A new symlink is created under a temporary name in the same directory and
    renamed over ``link``. ``os.replace`` is atomic on POSIX, so readers see
    either the old target or the new one.

    Raises:
        CommitError: ``link`` is a real directory, or the symlink or rename failed.
            ``link`` is unchanged in every failure case.
    """
    if link.is_dir() and not link.is_symlink():
        raise CommitError(
            ErrorCode.SYMLINK_FAILED,
            message=f"Refusing to replace real directory with a symlink: {link}",
            path=link,
        )

    link.parent.mkdir(parents=True, exist_ok=True)
    tmp = _temp_link_path(link)
    try:
        os.symlink(target, tmp, target_is_directory=target.is_dir())
        os.replace(tmp, link)
    except OSError as exc:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        except OSError as cleanup_exc:
            logger.warning("could not remove temp symlink %s: %s", tmp, cleanup_exc)
        raise CommitError(
            ErrorCode.SYMLINK_FAILED,
            message=f"Failed to repoint {link.name}: {exc}",
            path=link,
            details={"target": str(target)},
        ) from exc
    logger.info("repointed %s -> %s", link, target)


def read_symlink(link: Path) -> Path | None:
    """Return the target of ``link``, or None if it is not a symlink."""
    if not link.is_symlink():
        return None
    try:
        return Path(os.readlink(link))
    except OSError:
        return None
