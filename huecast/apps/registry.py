"""Adapter registry populated once at startup."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

from huecast.apps.adapter import AppAdapter, Capability
from huecast.errors import ErrorCode, RegistrationError


class AdapterRegistry:
    """Insertion-ordered map of adapter name to adapter.

    ``register`` is only valid until ``freeze``; a frozen registry is
    read-only for the rest of the process.
    """

    def __init__(self, adapters: Iterable[AppAdapter] = ()) -> None:
        self._adapters: dict[str, AppAdapter] = {}
        self._frozen = False
        for adapter in adapters:
            self.register(adapter)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, adapter: AppAdapter) -> None:
        if self._frozen:
            raise RegistrationError(
                ErrorCode.CONFIG_INVALID,
                message=f"Adapter registry is frozen; cannot register {adapter.name!r}",
            )
        if adapter.name in self._adapters:
            raise RegistrationError(
                ErrorCode.ADAPTER_DUPLICATE,
                message=f"Adapter already registered: {adapter.name}",
                details={"name": adapter.name},
            )
        self._adapters[adapter.name] = adapter

    def freeze(self) -> AdapterRegistry:
        self._frozen = True
        return self

    def get(self, name: str) -> AppAdapter | None:
        return self._adapters.get(name.strip().lower())

    def all(self) -> list[AppAdapter]:
        return list(self._adapters.values())

    def all_with_capability(self, capability: Capability) -> list[AppAdapter]:
        return [adapter for adapter in self._adapters.values() if adapter.supports(capability)]

    def names(self) -> list[str]:
        return list(self._adapters)

    def as_mapping(self) -> MappingProxyType[str, AppAdapter]:
        return MappingProxyType(self._adapters)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._adapters)
