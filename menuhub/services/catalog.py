"""
Cached list reads of catalog and configuration collections.

A CatalogReader is created per request or per fan-out run and owns its
cache, so nothing read here outlives the run that read it.
"""
import json
import time
from typing import Any, Callable, Optional

from menuhub.config import get_settings
from menuhub.services.document_store import DocumentStore

UNORDERED = 999


class TTLCache:
    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at < self.ttl_seconds:
            return value
        del self._entries[key]
        return None

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)

    def invalidate(self, prefix: str = "") -> None:
        """Drop every key starting with prefix (all keys when empty)"""
        for key in [k for k in self._entries if k.startswith(prefix)]:
            del self._entries[key]

    def __len__(self) -> int:
        return len(self._entries)


def _display_order(document) -> tuple[int, str]:
    return (document.order if document.order is not None else UNORDERED, document.name)


class CatalogReader:
    def __init__(self, store: DocumentStore, cache: Optional[TTLCache] = None):
        self.store = store
        self.cache = cache if cache is not None else TTLCache(get_settings().CATALOG_CACHE_TTL_SECONDS)

    async def fetch(self, collection: str, **filters: Any) -> list:
        key = f"{collection}-{json.dumps(filters, sort_keys=True)}"
        cached = self.cache.get(key)
        if cached is not None:
            return cached
        if filters:
            documents = await self.store.find(collection, **filters)
        else:
            documents = await self.store.list_all(collection)
        self.cache.set(key, documents)
        return documents

    async def active(self, collection: str) -> list:
        return [d for d in await self.fetch(collection) if d.status == "active"]

    async def active_companies(self) -> list:
        return await self.active("companies")

    async def active_buildings(self, company_id: Optional[str] = None) -> list:
        buildings = await self.active("buildings")
        if company_id is not None:
            buildings = [b for b in buildings if b.company_id == company_id]
        return buildings

    async def service_structures(self) -> list:
        return await self.active("structure_assignments")

    async def meal_plan_structures(self) -> list:
        return await self.active("meal_plan_structure_assignments")

    async def active_menu_items(self) -> list:
        return sorted(await self.active("menu_items"), key=_display_order)

    async def active_ordered(self, collection: str) -> list:
        """Active services / meal plans etc. in display order"""
        return sorted(await self.active(collection), key=_display_order)

    async def menu_item_names(self) -> dict[str, str]:
        # Inactive items still need names when rendering old changes
        return {item.id: item.name for item in await self.fetch("menu_items")}

    def invalidate(self, collection: str = "") -> None:
        self.cache.invalidate(f"{collection}-" if collection else "")
