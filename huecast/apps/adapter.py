"""App adapter contract.

Each supported application is described by one ``AppAdapter`` value. Identity
and detection fields are required; the three capabilities are optional
callables, so an adapter supports whatever subset it fills in:

``generate_config(colors) -> ThemeConfigOutput``
    Pure. Identical colors must yield byte-identical output.
``detect_integration(config_path) -> bool``
    Whether the app's own config already references Huecast output. Must
    not raise; unreadable files count as "not integrated".
``notify(theme_dir, on_log) -> bool``
    Copy a staged artifact into the app's live location and nudge a reload.
    Returns False on failure instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from pathlib import Path
from typing import Callable

from huecast.themes.models import ThemeColors

logger = logging.getLogger(__name__)

LogCallback = Callable[[str], None]

INTEGRATION_MARKERS: tuple[str, ...] = (
    "huecast",
    "wezterm-colors.lua",
)


class AppCategory(str, Enum):
    TERMINAL = "terminal"
    EDITOR = "editor"
    SYSTEM = "system"
    TILING = "tiling"


class Capability(str, Enum):
    GENERATE = "generate_config"
    DETECT = "detect_integration"
    NOTIFY = "notify"


@dataclass(frozen=True, slots=True)
class ThemeConfigOutput:
    """A generated config artifact."""

    file_name: str
    content: str


@dataclass(frozen=True, slots=True)
class Snippet:
    """Text a user pastes into an existing config to pick up Huecast output."""

    code: str
    instructions: str


@dataclass(frozen=True, slots=True)
class AppAdapter:
    name: str
    display_name: str
    category: AppCategory
    install_paths: tuple[Path, ...]
    config_path: Path
    config_paths: tuple[Path, ...] = ()
    snippet: Snippet | None = None
    generate_config: Callable[[ThemeColors], ThemeConfigOutput] | None = field(default=None, compare=False)
    detect_integration: Callable[[Path], bool] | None = field(default=None, compare=False)
    notify: Callable[[Path, LogCallback | None], bool] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or self.name != self.name.lower():
            raise ValueError(f"Adapter name must be non-empty lowercase, got {self.name!r}")
        if not self.install_paths:
            raise ValueError(f"Adapter {self.name!r} needs at least one install path")

    def supports(self, capability: Capability) -> bool:
        return getattr(self, capability.value) is not None

    @property
    def capabilities(self) -> frozenset[Capability]:
        return frozenset(cap for cap in Capability if self.supports(cap))

    def is_installed(self) -> bool:
        return any(path.exists() for path in self.install_paths)

    def resolve_config_path(self) -> Path:
        return resolve_config_path(self)

    def check_integration(self, config_path: Path | None = None) -> bool:
        """Run the adapter's detector, or the default marker search."""
        target = config_path if config_path is not None else self.resolve_config_path()
        detector = self.detect_integration or has_integration_markers
        try:
            return bool(detector(target))
        except Exception as exc:
            logger.warning("integration check for %s failed: %s", self.name, exc)
            return False


def resolve_config_path(adapter: AppAdapter) -> Path:
    """First existing entry of ``config_paths``; else its first entry; else ``config_path``."""
    for candidate in adapter.config_paths:
        if candidate.exists():
            return candidate
    if adapter.config_paths:
        return adapter.config_paths[0]
    return adapter.config_path


def content_has_integration(content: str) -> bool:
    lowered = content.lower()
    return any(marker in lowered for marker in INTEGRATION_MARKERS)


def has_integration_markers(config_path: Path) -> bool:
    """Default detector: substring search of a config file."""
    if not config_path.is_file():
        return False
    try:
        content = config_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return False
    return content_has_integration(content)
