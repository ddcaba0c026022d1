"""
Generated company menu API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import Any, List, Optional
from datetime import date, datetime
from pydantic import BaseModel

from menuhub.api.combined_menus import MenuDataUpdate, MenuDataUpdateResponse
from menuhub.api.deps import get_catalog, get_store, parse_grid
from menuhub.services.catalog import CatalogReader
from menuhub.services.combined_menus import update_company_menu_data
from menuhub.services.document_store import DocumentStore

router = APIRouter()


class CompanyMenuResponse(BaseModel):
    id: str
    combined_menu_id: str
    company_id: str
    building_id: str
    company_name: Optional[str]
    building_name: Optional[str]
    start_date: date
    end_date: date
    menu_data: dict[str, Any]
    status: str
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


@router.get("/", response_model=List[CompanyMenuResponse])
async def list_company_menus(
    combined_menu_id: Optional[str] = None,
    company_id: Optional[str] = None,
    building_id: Optional[str] = None,
    store: DocumentStore = Depends(get_store),
):
    filters = {
        name: value
        for name, value in (
            ("combined_menu_id", combined_menu_id),
            ("company_id", company_id),
            ("building_id", building_id),
        )
        if value
    }
    menus = await store.find("company_menus", **filters)
    return sorted(menus, key=lambda m: (m.company_name or "", m.building_name or ""))


@router.get("/{menu_id}", response_model=CompanyMenuResponse)
async def get_company_menu(
    menu_id: str,
    store: DocumentStore = Depends(get_store),
):
    menu = await store.get("company_menus", menu_id)
    if not menu:
        raise HTTPException(status_code=404, detail="Company menu not found")
    return menu


@router.put("/{menu_id}/menu-data", response_model=MenuDataUpdateResponse)
async def update_company_menu(
    menu_id: str,
    data: MenuDataUpdate,
    store: DocumentStore = Depends(get_store),
    catalog: CatalogReader = Depends(get_catalog),
):
    """Edit one building's menu and log the changed cells"""
    menu, updation = await update_company_menu_data(
        store, menu_id, parse_grid(data.menu_data), catalog, notes=data.notes
    )
    if updation is None:
        return MenuDataUpdateResponse(menu_id=menu.id)
    return MenuDataUpdateResponse(
        menu_id=menu.id,
        updation_id=updation.id,
        updation_number=updation.updation_number,
        total_changes=updation.total_changes,
    )
