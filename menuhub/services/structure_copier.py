"""
Upserting weekly structures for a building, and copying one building's pair
of structures to sibling buildings of the same company.

Writes are keyed by (company_id, building_id): an existing active structure
is overwritten in place, otherwise a new active one is created. Repeating a
copy therefore never produces a second active structure for a building.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from menuhub.services.document_store import DocumentStore, WriteOp
from menuhub.services.week_structure import (
    MealPlanStructure,
    ServiceStructure,
    StructurePair,
    find_active,
)
from menuhub.utils.exceptions import CrossCompanyCopyRejected, EntityNotFound, PersistenceFailure

logger = logging.getLogger(__name__)

SERVICE_STRUCTURES = "structure_assignments"
MEAL_PLAN_STRUCTURES = "meal_plan_structure_assignments"


@dataclass
class UpsertOutcome:
    building_id: str
    service_structure_id: str
    meal_plan_structure_id: str
    created: list[str] = field(default_factory=list)  # collections that got a new document


@dataclass
class CopyResult:
    outcomes: list[UpsertOutcome] = field(default_factory=list)
    failed: list[tuple[str, Exception]] = field(default_factory=list)

    @property
    def created(self) -> list[str]:
        return [o.building_id for o in self.outcomes if o.created]

    @property
    def updated(self) -> list[str]:
        return [o.building_id for o in self.outcomes if not o.created]


async def _existing_active(store: DocumentStore, collection: str, company_id: str, building_id: str):
    candidates = await store.find(collection, company_id=company_id, building_id=building_id)
    return find_active(candidates, company_id, building_id)


async def _upsert_op(
    store: DocumentStore, collection: str, company: Any, building: Any, week_structure: dict
) -> tuple[WriteOp, bool]:
    data = {
        "company_id": company.id,
        "building_id": building.id,
        "company_name": company.name,
        "building_name": building.name,
        "week_structure": week_structure,
        "status": "active",
    }
    existing = await _existing_active(store, collection, company.id, building.id)
    if existing is not None:
        return WriteOp.update(collection, existing.id, data), False
    return WriteOp.create(collection, data), True


async def upsert_structures(
    store: DocumentStore,
    company: Any,
    building: Any,
    service_structure: ServiceStructure,
    meal_plan_structure: MealPlanStructure,
) -> UpsertOutcome:
    """Write both structures of one building in a single batch."""
    service_op, service_created = await _upsert_op(
        store, SERVICE_STRUCTURES, company, building, service_structure.to_document()
    )
    meal_plan_op, meal_plan_created = await _upsert_op(
        store, MEAL_PLAN_STRUCTURES, company, building, meal_plan_structure.to_document()
    )
    service_doc, meal_plan_doc = await store.batch_write([service_op, meal_plan_op])

    created = []
    if service_created:
        created.append(SERVICE_STRUCTURES)
    if meal_plan_created:
        created.append(MEAL_PLAN_STRUCTURES)
    logger.info(
        f"{'Created' if created else 'Updated'} structures for building {building.name} ({building.id})"
    )
    return UpsertOutcome(building.id, service_doc.id, meal_plan_doc.id, created)


async def _company_buildings(
    store: DocumentStore, company_id: str, building_ids: Iterable[str]
) -> tuple[Any, list[Any]]:
    company = await store.get_or_raise("companies", company_id)
    buildings = [await store.get_or_raise("buildings", building_id) for building_id in building_ids]
    outside = [b.id for b in buildings if b.company_id != company_id]
    if outside:
        raise CrossCompanyCopyRejected(company_id, outside)
    return company, buildings


async def save_structure_pair(
    store: DocumentStore,
    company_id: str,
    building_id: str,
    service_structure: ServiceStructure,
    meal_plan_structure: MealPlanStructure,
) -> UpsertOutcome:
    company, (building,) = await _company_buildings(store, company_id, [building_id])
    return await upsert_structures(store, company, building, service_structure, meal_plan_structure)


async def copy_structure(
    store: DocumentStore,
    source: StructurePair,
    target_building_ids: Iterable[str],
    company_id: Optional[str] = None,
) -> CopyResult:
    """
    Copy the source building's structures to the target buildings.

    All targets must belong to the source company; otherwise nothing is
    written. The source building is ignored if listed as a target.
    """
    company_id = company_id or source.company_id
    if source.company_id != company_id:
        raise CrossCompanyCopyRejected(company_id, [source.building_id])

    target_ids = sorted({b for b in target_building_ids if b != source.building_id})
    company, targets = await _company_buildings(store, company_id, target_ids)

    result = CopyResult()
    outcomes = await asyncio.gather(
        *(
            upsert_structures(
                store, company, building, source.service_structure, source.meal_plan_structure
            )
            for building in targets
        ),
        return_exceptions=True,
    )
    for building, outcome in zip(targets, outcomes):
        if isinstance(outcome, PersistenceFailure):
            result.failed.append((building.id, outcome))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            result.outcomes.append(outcome)

    logger.info(
        f"Copied structures of building {source.building_id} to "
        f"{len(result.outcomes)} building(s), {len(result.failed)} failed"
    )
    if result.failed:
        raise PersistenceFailure(
            f"Failed to copy structures to building(s): {', '.join(b for b, _ in result.failed)}",
            failures=result.failed,
            result=result,
        )
    return result
