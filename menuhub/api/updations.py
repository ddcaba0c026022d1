"""
Menu updation log API endpoints
"""
from fastapi import APIRouter, Depends
from typing import Any, List, Optional
from datetime import date, datetime
from pydantic import BaseModel

from menuhub.api.deps import get_store
from menuhub.services.document_store import DocumentStore

router = APIRouter()


class UpdationResponse(BaseModel):
    id: str
    menu_id: str
    menu_type: str
    company_id: Optional[str]
    company_name: Optional[str]
    building_id: Optional[str]
    building_name: Optional[str]
    updation_number: int
    changed_cells: List[dict[str, Any]]
    total_changes: int
    menu_start_date: Optional[date]
    menu_end_date: Optional[date]
    notes: Optional[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


@router.get("/", response_model=List[UpdationResponse])
async def list_updations(
    menu_id: Optional[str] = None,
    company_id: Optional[str] = None,
    store: DocumentStore = Depends(get_store),
):
    """Updations, latest first"""
    if menu_id:
        updations = await store.find("updations", menu_id=menu_id)
    elif company_id:
        updations = await store.find("updations", company_id=company_id, menu_type="company")
    else:
        updations = await store.list_all("updations")
    return sorted(updations, key=lambda u: (u.created_at, u.updation_number), reverse=True)
