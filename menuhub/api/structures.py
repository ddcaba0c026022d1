"""
Weekly structure API endpoints: read, save, and copy to sibling buildings
"""
from fastapi import APIRouter, Depends
from typing import Any, List, Optional
from pydantic import BaseModel

from menuhub.api.deps import get_store
from menuhub.services.document_store import DocumentStore
from menuhub.services.structure_copier import (
    MEAL_PLAN_STRUCTURES,
    SERVICE_STRUCTURES,
    copy_structure,
    save_structure_pair,
)
from menuhub.services.week_structure import (
    MealPlanStructure,
    ServiceStructure,
    find_active,
    resolve_structure_pair,
)

router = APIRouter()


class StructureDocument(BaseModel):
    id: str
    week_structure: dict[str, Any]
    status: str

    class Config:
        from_attributes = True


class StructurePairResponse(BaseModel):
    company_id: str
    building_id: str
    service_structure: Optional[StructureDocument] = None
    meal_plan_structure: Optional[StructureDocument] = None


class StructurePairUpdate(BaseModel):
    service_structure: dict[str, Any]
    meal_plan_structure: dict[str, Any]


class StructureCopyRequest(BaseModel):
    target_building_ids: List[str]


class StructureCopyResponse(BaseModel):
    created: List[str]
    updated: List[str]


async def _active_pair(store: DocumentStore, company_id: str, building_id: str) -> StructurePairResponse:
    service = find_active(
        await store.find(SERVICE_STRUCTURES, company_id=company_id, building_id=building_id),
        company_id, building_id,
    )
    meal_plan = find_active(
        await store.find(MEAL_PLAN_STRUCTURES, company_id=company_id, building_id=building_id),
        company_id, building_id,
    )
    return StructurePairResponse(
        company_id=company_id,
        building_id=building_id,
        service_structure=StructureDocument.model_validate(service) if service else None,
        meal_plan_structure=StructureDocument.model_validate(meal_plan) if meal_plan else None,
    )


@router.get("/{company_id}/{building_id}", response_model=StructurePairResponse)
async def get_structures(
    company_id: str,
    building_id: str,
    store: DocumentStore = Depends(get_store),
):
    """Active service and meal plan structures of a building (either may be missing)"""
    return await _active_pair(store, company_id, building_id)


@router.put("/{company_id}/{building_id}", response_model=StructurePairResponse)
async def save_structures(
    company_id: str,
    building_id: str,
    data: StructurePairUpdate,
    store: DocumentStore = Depends(get_store),
):
    """Upsert both structures of a building"""
    await save_structure_pair(
        store,
        company_id,
        building_id,
        ServiceStructure.from_document(data.service_structure),
        MealPlanStructure.from_document(data.meal_plan_structure),
    )
    return await _active_pair(store, company_id, building_id)


@router.post("/{company_id}/{building_id}/copy", response_model=StructureCopyResponse)
async def copy_structures(
    company_id: str,
    building_id: str,
    data: StructureCopyRequest,
    store: DocumentStore = Depends(get_store),
):
    """Copy this building's structures to other buildings of the same company"""
    source = resolve_structure_pair(
        company_id,
        building_id,
        await store.find(SERVICE_STRUCTURES, company_id=company_id, building_id=building_id),
        await store.find(MEAL_PLAN_STRUCTURES, company_id=company_id, building_id=building_id),
    )
    result = await copy_structure(store, source, data.target_building_ids, company_id)
    return StructureCopyResponse(created=result.created, updated=result.updated)
