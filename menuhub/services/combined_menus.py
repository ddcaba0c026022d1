"""
Combined menu workflow: save + fan-out, edits with change logging, and
cascading delete.

Company menus are snapshots. Editing a combined menu after fan-out records an
updation but does not regenerate the company menus generated from it; that
only happens through an explicit sync, which overwrites them in place.
"""
import asyncio
import logging
from datetime import date
from typing import Any, Optional, Union

from menuhub.services.catalog import CatalogReader
from menuhub.services.change_detector import detect_menu_changes, summarize_changes
from menuhub.services.dates import expand_date_range
from menuhub.services.document_store import DocumentStore, WriteOp
from menuhub.services.fan_out import FanOutResult, existing_by_building, generate_all
from menuhub.services.menu_grid import MenuGrid
from menuhub.services.projection import project
from menuhub.services.week_structure import resolve_structure_pair
from menuhub.utils.exceptions import DuplicateMenu, EmptyMenu
from menuhub.utils.validators import validate_status

logger = logging.getLogger(__name__)

DateLike = Union[str, date]


async def find_duplicate(store: DocumentStore, start: date, end: date) -> Optional[Any]:
    """A non-archived combined menu with exactly the same dates"""
    menus = await store.find("combined_menus", start_date=start, end_date=end)
    return next((m for m in menus if m.status != "archived"), None)


async def create_combined_menu(
    store: DocumentStore,
    start: DateLike,
    end: DateLike,
    grid: MenuGrid,
    catalog: CatalogReader,
    status: str = "active",
) -> tuple[Any, FanOutResult]:
    """Save the master grid, then generate a company menu per building."""
    slots = expand_date_range(start, end)
    start_day, end_day = slots[0].date, slots[-1].date
    status = validate_status(status)

    menu_grid = grid.pruned(dates=[slot.key for slot in slots])
    if menu_grid.is_empty():
        raise EmptyMenu()

    duplicate = await find_duplicate(store, start_day, end_day)
    if duplicate is not None:
        raise DuplicateMenu(start_day.isoformat(), end_day.isoformat(), duplicate.id)

    menu = await store.create("combined_menus", {
        "start_date": start_day,
        "end_date": end_day,
        "menu_data": menu_grid.to_dict(),
        "status": status,
    })
    logger.info(f"Saved combined menu {menu.id} for {start_day} to {end_day}")

    result = await _fan_out(store, menu.id, menu_grid, slots, catalog)
    return menu, result


async def _fan_out(
    store: DocumentStore,
    menu_id: str,
    grid: MenuGrid,
    slots: list,
    catalog: CatalogReader,
    existing: Optional[dict] = None,
) -> FanOutResult:
    companies, buildings, service_structures, meal_plan_structures = await asyncio.gather(
        catalog.active_companies(),
        catalog.active_buildings(),
        catalog.service_structures(),
        catalog.meal_plan_structures(),
    )
    return await generate_all(
        store,
        menu_id,
        grid,
        slots,
        companies,
        buildings,
        service_structures,
        meal_plan_structures,
        existing=existing,
    )


async def sync_company_menus(
    store: DocumentStore,
    menu_id: str,
    catalog: CatalogReader,
) -> tuple[Any, FanOutResult]:
    """
    Regenerate the company menus of a saved combined menu.

    Each (company, building) that already has a menu for it is overwritten,
    the rest are created. Used to finish a fan-out that partly failed, or to
    push combined menu edits and structure changes to the buildings.
    """
    menu = await store.get_or_raise("combined_menus", menu_id)
    slots = expand_date_range(menu.start_date, menu.end_date)
    existing = existing_by_building(await store.find("company_menus", combined_menu_id=menu.id))

    result = await _fan_out(store, menu.id, MenuGrid.from_dict(menu.menu_data), slots, catalog, existing)
    logger.info(f"Synced company menus of combined menu {menu.id}")
    return menu, result


async def preview_company_menu(
    catalog: CatalogReader,
    grid: MenuGrid,
    start: DateLike,
    end: DateLike,
    company_id: str,
    building_id: str,
) -> MenuGrid:
    """Projection for one building without saving anything."""
    slots = expand_date_range(start, end)
    pair = resolve_structure_pair(
        company_id,
        building_id,
        await catalog.service_structures(),
        await catalog.meal_plan_structures(),
    )
    return project(grid, pair.service_structure, pair.meal_plan_structure, slots)


async def delete_combined_menu(store: DocumentStore, menu_id: str) -> int:
    """Delete a combined menu and every company menu generated from it."""
    await store.get_or_raise("combined_menus", menu_id)
    company_menus = await store.find("company_menus", combined_menu_id=menu_id)

    ops = [WriteOp.delete("company_menus", m.id) for m in company_menus]
    ops.append(WriteOp.delete("combined_menus", menu_id))
    await store.batch_write(ops)

    logger.info(f"Deleted combined menu {menu_id} and {len(company_menus)} company menu(s)")
    return len(company_menus)


async def latest_updation_number(store: DocumentStore, menu_id: str) -> int:
    updations = await store.find("updations", menu_id=menu_id)
    return max((u.updation_number or 0 for u in updations), default=0)


async def _replace_menu_data(
    store: DocumentStore,
    collection: str,
    menu_type: str,
    menu_id: str,
    grid: MenuGrid,
    catalog: CatalogReader,
    notes: Optional[str],
) -> tuple[Any, Optional[Any]]:
    menu = await store.get_or_raise(collection, menu_id)
    original = MenuGrid.from_dict(menu.menu_data)
    slots = expand_date_range(menu.start_date, menu.end_date)
    updated = grid.pruned(dates=[slot.key for slot in slots])

    changed_cells = detect_menu_changes(original, updated, await catalog.menu_item_names())
    if not changed_cells:
        return menu, None

    updation = {
        "menu_id": menu.id,
        "menu_type": menu_type,
        "updation_number": await latest_updation_number(store, menu.id) + 1,
        "changed_cells": [cell.to_document() for cell in changed_cells],
        "total_changes": summarize_changes(changed_cells)["total_changes"],
        "menu_start_date": menu.start_date,
        "menu_end_date": menu.end_date,
        "notes": notes,
    }
    if menu_type == "company":
        updation.update({
            "company_id": menu.company_id,
            "company_name": menu.company_name,
            "building_id": menu.building_id,
            "building_name": menu.building_name,
        })

    menu, updation_doc = await store.batch_write([
        WriteOp.update(collection, menu.id, {"menu_data": updated.to_dict()}),
        WriteOp.create("updations", updation),
    ])
    logger.info(
        f"Recorded updation #{updation_doc.updation_number} for {menu_type} menu {menu.id} "
        f"({updation_doc.total_changes} change(s))"
    )
    return menu, updation_doc


async def update_combined_menu_data(
    store: DocumentStore,
    menu_id: str,
    grid: MenuGrid,
    catalog: CatalogReader,
    notes: Optional[str] = None,
) -> tuple[Any, Optional[Any]]:
    return await _replace_menu_data(store, "combined_menus", "combined", menu_id, grid, catalog, notes)


async def update_company_menu_data(
    store: DocumentStore,
    menu_id: str,
    grid: MenuGrid,
    catalog: CatalogReader,
    notes: Optional[str] = None,
) -> tuple[Any, Optional[Any]]:
    return await _replace_menu_data(store, "company_menus", "company", menu_id, grid, catalog, notes)
