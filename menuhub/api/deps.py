"""
Shared route dependencies
"""
from typing import Any

from fastapi import Depends, HTTPException

from menuhub.database import AsyncSessionLocal, is_sqlite
from menuhub.services.catalog import CatalogReader
from menuhub.services.document_store import DocumentStore
from menuhub.services.menu_grid import MenuGrid

_store = DocumentStore(AsyncSessionLocal, serialize_writes=is_sqlite)


def get_store() -> DocumentStore:
    return _store


def get_catalog(store: DocumentStore = Depends(get_store)) -> CatalogReader:
    """Fresh reader per request so cached lists never outlive it"""
    return CatalogReader(store)


def parse_grid(menu_data: dict[str, Any]) -> MenuGrid:
    try:
        return MenuGrid.from_dict(menu_data)
    except TypeError as e:
        raise HTTPException(status_code=400, detail=f"Malformed menu data: {e}")
