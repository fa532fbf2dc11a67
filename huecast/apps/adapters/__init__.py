"""Built-in application adapters."""

from __future__ import annotations

from pathlib import Path

from huecast.apps.adapters.aerospace import build_aerospace_adapter
from huecast.apps.adapters.neovim import build_neovim_adapter
from huecast.apps.adapters.sketchybar import build_sketchybar_adapter
from huecast.apps.adapters.warp import build_warp_adapter
from huecast.apps.adapters.wezterm import build_wezterm_adapter
from huecast.apps.registry import AdapterRegistry

ADAPTER_FACTORIES = (
    build_wezterm_adapter,
    build_warp_adapter,
    build_neovim_adapter,
    build_sketchybar_adapter,
    build_aerospace_adapter,
)


def build_default_registry(home: Path | None = None, data_dir: Path | None = None) -> AdapterRegistry:
    """Register every built-in adapter and freeze the registry.

    Raises:
        RegistrationError: two factories produced the same adapter name.
    """
    home = home if home is not None else Path.home()
    if data_dir is None:
        from huecast.config.settings import AppSettings

        data_dir = AppSettings().data_dir
    registry = AdapterRegistry()
    for factory in ADAPTER_FACTORIES:
        registry.register(factory(home, data_dir))
    return registry.freeze()


__all__ = ["ADAPTER_FACTORIES", "build_default_registry"]
