"""Runtime path helpers for source and frozen executable modes."""

from __future__ import annotations

from pathlib import Path
import sys


def is_frozen() -> bool:
    """Return True when running from a PyInstaller bundle."""
    return bool(getattr(sys, "frozen", False))


def bundle_root() -> Path:
    """Return the runtime extraction root for frozen mode, else package parent."""
    if is_frozen():
        meipass = getattr(sys, "_MEIPASS", None)
        if meipass:
            return Path(meipass)
    return Path(__file__).resolve().parent.parent


def package_root() -> Path:
    """Return the root path that contains the `huecast` package resources."""
    if is_frozen():
        root = bundle_root()
        candidate = root / "huecast"
        if candidate.exists():
            return candidate
        return root
    return Path(__file__).resolve().parent


def resource_path(*parts: str) -> Path:
    """Resolve a bundled resource path across source/frozen runtime layouts."""
    return package_root().joinpath("resources", *parts)


def bundled_binary(name: str) -> Path:
    """Resolve a helper binary shipped under resources/bin."""
    return resource_path("bin", name)
