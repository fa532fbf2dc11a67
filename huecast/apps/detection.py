"""Install, config and integration status for registered apps."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from huecast.apps.adapter import AppAdapter, AppCategory
from huecast.apps.registry import AdapterRegistry


@dataclass(frozen=True, slots=True)
class AppInfo:
    name: str
    display_name: str
    category: AppCategory
    is_installed: bool
    is_configured: bool
    has_integration: bool
    config_path: Path


def detect_app(adapter: AppAdapter) -> AppInfo:
    config_path = adapter.resolve_config_path()
    installed = adapter.is_installed()
    configured = config_path.exists()
    # Only look inside configs of apps that are actually present.
    integrated = installed and configured and adapter.check_integration(config_path)
    return AppInfo(
        name=adapter.name,
        display_name=adapter.display_name,
        category=adapter.category,
        is_installed=installed,
        is_configured=configured,
        has_integration=integrated,
        config_path=config_path,
    )


def detect_apps(registry: AdapterRegistry) -> list[AppInfo]:
    """One ``AppInfo`` per registered adapter, in registration order."""
    return [detect_app(adapter) for adapter in registry.all()]
