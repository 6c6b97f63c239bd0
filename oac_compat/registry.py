"""Catalog of adapters keyed by tool name."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from oac_compat.adapters import BUILTIN_ADAPTERS, BaseAdapter, ToolCapabilities
from oac_compat.errors import AdapterRegistryError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdapterInfo:
    name: str
    display_name: str
    capabilities: ToolCapabilities


class AdapterRegistry:
    """Insertion-ordered mapping of adapter name to adapter instance.

    Writes and snapshots take a lock; ``get`` reads the dict directly.
    """

    def __init__(self) -> None:
        self._adapters: dict[str, BaseAdapter] = {}
        self._infos: dict[str, AdapterInfo] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: object) -> bool:
        return name in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)

    def register(self, adapter: BaseAdapter) -> None:
        name = adapter.name
        with self._lock:
            if name in self._adapters:
                raise AdapterRegistryError(f"Adapter already registered: {name}")
            self._infos[name] = AdapterInfo(
                name=name,
                display_name=adapter.display_name,
                capabilities=adapter.capabilities,
            )
            self._adapters[name] = adapter
        logger.debug("Registered adapter %s", name)

    def unregister(self, name: str) -> bool:
        with self._lock:
            if name not in self._adapters:
                return False
            del self._adapters[name]
            del self._infos[name]
        logger.debug("Unregistered adapter %s", name)
        return True

    def get(self, name: str) -> Optional[BaseAdapter]:
        return self._adapters.get(name)

    def require(self, name: str) -> BaseAdapter:
        adapter = self.get(name)
        if adapter is None:
            known = ", ".join(self.list_adapters()) or "none"
            raise AdapterRegistryError(f"Unknown adapter: {name} (available: {known})")
        return adapter

    def list_adapters(self) -> list[str]:
        with self._lock:
            return list(self._adapters)

    def get_all_capabilities(self) -> dict[str, AdapterInfo]:
        with self._lock:
            return dict(self._infos)


def create_default_registry() -> AdapterRegistry:
    registry = AdapterRegistry()
    for adapter_class in BUILTIN_ADAPTERS:
        registry.register(adapter_class())
    return registry
