"""
Combined menu API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException
from typing import Any, List, Optional
from datetime import date, datetime
from pydantic import BaseModel, Field, field_validator

from menuhub.config import get_settings
from menuhub.api.deps import get_catalog, get_store, parse_grid
from menuhub.services.catalog import CatalogReader
from menuhub.services.combined_menus import (
    create_combined_menu,
    delete_combined_menu,
    preview_company_menu,
    sync_company_menus,
    update_combined_menu_data,
)
from menuhub.services.document_store import DocumentStore
from menuhub.utils.validators import validate_status

router = APIRouter()
settings = get_settings()


class CombinedMenuResponse(BaseModel):
    id: str
    start_date: date
    end_date: date
    menu_data: dict[str, Any]
    status: str
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class CombinedMenuCreate(BaseModel):
    start_date: date
    end_date: date
    menu_data: dict[str, Any]
    status: str = Field(default_factory=lambda: settings.DEFAULT_STATUS)

    @field_validator("status")
    @classmethod
    def check_status(cls, value: str) -> str:
        return validate_status(value)


class MenuDataUpdate(BaseModel):
    menu_data: dict[str, Any]
    notes: Optional[str] = None


class SkippedBuildingResponse(BaseModel):
    company_id: str
    building_id: str
    building_name: str
    reason: str


class FanOutResponse(BaseModel):
    combined_menu: CombinedMenuResponse
    company_menu_ids: List[str]
    generated: int
    updated: List[str] = []
    skipped: List[SkippedBuildingResponse]


class MenuPreviewRequest(BaseModel):
    start_date: date
    end_date: date
    menu_data: dict[str, Any]
    company_id: str
    building_id: str


class MenuDataUpdateResponse(BaseModel):
    menu_id: str
    updation_id: Optional[str] = None
    updation_number: Optional[int] = None
    total_changes: int = 0


def _fan_out_response(menu, result) -> FanOutResponse:
    return FanOutResponse(
        combined_menu=CombinedMenuResponse.model_validate(menu),
        company_menu_ids=[m.id for m in result.generated],
        generated=len(result.generated),
        updated=result.updated,
        skipped=[SkippedBuildingResponse(**vars(s)) for s in result.skipped],
    )


@router.post("/", response_model=FanOutResponse)
async def create_menu(
    data: CombinedMenuCreate,
    store: DocumentStore = Depends(get_store),
    catalog: CatalogReader = Depends(get_catalog),
):
    """Save a combined menu and generate company menus for every configured building"""
    menu, result = await create_combined_menu(
        store,
        data.start_date,
        data.end_date,
        parse_grid(data.menu_data),
        catalog,
        status=data.status,
    )
    return _fan_out_response(menu, result)


@router.post("/preview")
async def preview_menu(
    data: MenuPreviewRequest,
    catalog: CatalogReader = Depends(get_catalog),
):
    """Project a grid for one building without saving"""
    grid = await preview_company_menu(
        catalog,
        parse_grid(data.menu_data),
        data.start_date,
        data.end_date,
        data.company_id,
        data.building_id,
    )
    return {"menu_data": grid.to_dict()}


@router.get("/", response_model=List[CombinedMenuResponse])
async def list_menus(
    status: Optional[str] = None,
    store: DocumentStore = Depends(get_store),
):
    """List combined menus, newest range first"""
    menus = await store.find("combined_menus", status=status) if status else await store.list_all("combined_menus")
    return sorted(menus, key=lambda m: m.start_date, reverse=True)


@router.get("/{menu_id}", response_model=CombinedMenuResponse)
async def get_menu(
    menu_id: str,
    store: DocumentStore = Depends(get_store),
):
    menu = await store.get("combined_menus", menu_id)
    if not menu:
        raise HTTPException(status_code=404, detail="Combined menu not found")
    return menu


@router.post("/{menu_id}/sync", response_model=FanOutResponse)
async def sync_menu(
    menu_id: str,
    store: DocumentStore = Depends(get_store),
    catalog: CatalogReader = Depends(get_catalog),
):
    """Regenerate company menus, overwriting the ones that already exist"""
    menu, result = await sync_company_menus(store, menu_id, catalog)
    return _fan_out_response(menu, result)


@router.put("/{menu_id}/menu-data", response_model=MenuDataUpdateResponse)
async def update_menu_data(
    menu_id: str,
    data: MenuDataUpdate,
    store: DocumentStore = Depends(get_store),
    catalog: CatalogReader = Depends(get_catalog),
):
    """Replace the grid; generated company menus are left untouched"""
    menu, updation = await update_combined_menu_data(
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


@router.delete("/{menu_id}")
async def delete_menu(
    menu_id: str,
    store: DocumentStore = Depends(get_store),
):
    """Delete a combined menu together with its company menus"""
    deleted = await delete_combined_menu(store, menu_id)
    return {"deleted": True, "company_menus_deleted": deleted}
