"""
Tests for the SQLAlchemy-backed document store
"""
import asyncio

import pytest

from menuhub.services.document_store import WriteOp
from menuhub.utils.exceptions import EntityNotFound, PersistenceFailure


async def test_create_get_update_delete(store):
    company = await store.create("companies", {"name": "Acme", "code": "ACM"})

    assert company.id
    assert company.status == "active"

    updated = await store.update("companies", company.id, {"contact_person": "Priya"})
    assert updated.contact_person == "Priya"
    assert (await store.get("companies", company.id)).contact_person == "Priya"

    await store.delete("companies", company.id)
    assert await store.get("companies", company.id) is None


async def test_find_matches_every_filter(store, seed_data):
    buildings = await store.find("buildings", company_id="C1", status="active")

    assert sorted(b.id for b in buildings) == ["B1", "B2", "B3"]


async def test_unknown_collection_and_field(store):
    with pytest.raises(ValueError, match="Unknown collection"):
        await store.list_all("recipes")

    with pytest.raises(ValueError, match="Unknown fields"):
        await store.find("companies", colour="red")


async def test_get_or_raise(store):
    with pytest.raises(EntityNotFound, match="companies C404"):
        await store.get_or_raise("companies", "C404")


async def test_batch_is_all_or_nothing(store):
    await store.create("companies", {"id": "C1", "name": "Acme"})

    with pytest.raises(PersistenceFailure):
        await store.batch_write([
            WriteOp.create("companies", {"id": "C2", "name": "Globex"}),
            WriteOp.create("companies", {"id": "C1", "name": "Acme again"}),
        ])

    assert await store.get("companies", "C2") is None


async def test_concurrent_writes_are_serialized(store):
    await asyncio.gather(*(
        store.create("menu_items", {"name": f"Item {n}", "category": "Curry"})
        for n in range(20)
    ))

    assert len(await store.list_all("menu_items")) == 20
