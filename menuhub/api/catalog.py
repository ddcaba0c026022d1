"""
Catalog API endpoints (read-only lists of active records)
"""
from fastapi import APIRouter, Depends
from typing import List, Optional
from pydantic import BaseModel

from menuhub.api.deps import get_catalog
from menuhub.services.catalog import CatalogReader

router = APIRouter()


class CompanyResponse(BaseModel):
    id: str
    name: str
    code: Optional[str]
    status: str

    class Config:
        from_attributes = True


class BuildingResponse(BaseModel):
    id: str
    name: str
    code: Optional[str]
    company_id: str
    capacity: Optional[int]
    status: str

    class Config:
        from_attributes = True


class MenuItemResponse(BaseModel):
    id: str
    name: str
    category: Optional[str]
    order: Optional[int]
    status: str

    class Config:
        from_attributes = True


class CatalogEntryResponse(BaseModel):
    id: str
    name: str
    order: Optional[int]
    status: str

    class Config:
        from_attributes = True


@router.get("/companies", response_model=List[CompanyResponse])
async def list_companies(catalog: CatalogReader = Depends(get_catalog)):
    return await catalog.active_companies()


@router.get("/buildings", response_model=List[BuildingResponse])
async def list_buildings(
    company_id: Optional[str] = None,
    catalog: CatalogReader = Depends(get_catalog),
):
    return await catalog.active_buildings(company_id)


@router.get("/menu-items", response_model=List[MenuItemResponse])
async def list_menu_items(catalog: CatalogReader = Depends(get_catalog)):
    """Active menu items in display order"""
    return await catalog.active_menu_items()


@router.get("/services", response_model=List[CatalogEntryResponse])
async def list_services(catalog: CatalogReader = Depends(get_catalog)):
    return await catalog.active_ordered("services")


@router.get("/meal-plans", response_model=List[CatalogEntryResponse])
async def list_meal_plans(catalog: CatalogReader = Depends(get_catalog)):
    return await catalog.active_ordered("meal_plans")
