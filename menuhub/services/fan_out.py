"""
Fan-out of one combined menu into a company menu per active building.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from menuhub.services.dates import DateSlot
from menuhub.services.document_store import DocumentStore
from menuhub.services.menu_grid import MenuGrid
from menuhub.services.projection import project
from menuhub.services.week_structure import resolve_structure_pair
from menuhub.utils.exceptions import MissingStructure, PersistenceFailure

logger = logging.getLogger(__name__)


@dataclass
class CompanyMenuDraft:
    company_id: str
    building_id: str
    company_name: str
    building_name: str
    start_date: date
    end_date: date
    menu_data: MenuGrid

    def to_document(self, combined_menu_id: str, status: str = "active") -> dict[str, Any]:
        return {
            "combined_menu_id": combined_menu_id,
            "company_id": self.company_id,
            "building_id": self.building_id,
            "company_name": self.company_name,
            "building_name": self.building_name,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "menu_data": self.menu_data.to_dict(),
            "status": status,
        }


@dataclass
class SkippedBuilding:
    company_id: str
    building_id: str
    building_name: str
    reason: str


@dataclass
class FanOutResult:
    combined_menu_id: Optional[str] = None
    generated: list = field(default_factory=list)
    updated: list[str] = field(default_factory=list)  # building ids whose menu already existed
    skipped: list[SkippedBuilding] = field(default_factory=list)
    failed: list[tuple[str, Exception]] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    def summary(self) -> dict[str, int]:
        return {
            "generated": len(self.generated),
            "skipped": len(self.skipped),
            "failed": len(self.failed),
        }


def plan_company_menus(
    grid: MenuGrid,
    date_range: Iterable[DateSlot],
    companies: Iterable[Any],
    buildings: Iterable[Any],
    service_structures: Iterable[Any],
    meal_plan_structures: Iterable[Any],
) -> tuple[list[CompanyMenuDraft], list[SkippedBuilding]]:
    """Project the grid for every active building; no writes."""
    slots = list(date_range)
    buildings = list(buildings)
    service_structures = list(service_structures)
    meal_plan_structures = list(meal_plan_structures)

    drafts = []
    skipped = []
    for company in companies:
        if company.status != "active":
            continue
        company_buildings = [
            b for b in buildings if b.company_id == company.id and b.status == "active"
        ]
        for building in company_buildings:
            try:
                pair = resolve_structure_pair(
                    company.id, building.id, service_structures, meal_plan_structures
                )
            except MissingStructure as e:
                logger.warning(f"Skipping building {building.name} ({building.id}): {e.message}")
                skipped.append(SkippedBuilding(company.id, building.id, building.name, e.message))
                continue

            drafts.append(CompanyMenuDraft(
                company_id=company.id,
                building_id=building.id,
                company_name=company.name,
                building_name=building.name,
                start_date=slots[0].date,
                end_date=slots[-1].date,
                menu_data=project(grid, pair.service_structure, pair.meal_plan_structure, slots),
            ))
    return drafts, skipped


def existing_by_building(company_menus: Iterable[Any]) -> dict[tuple[str, str], Any]:
    """Company menus keyed by (company_id, building_id)"""
    return {(m.company_id, m.building_id): m for m in company_menus}


async def generate_all(
    store: DocumentStore,
    combined_menu_id: str,
    grid: MenuGrid,
    date_range: Iterable[DateSlot],
    companies: Iterable[Any],
    buildings: Iterable[Any],
    service_structures: Iterable[Any],
    meal_plan_structures: Iterable[Any],
    status: str = "active",
    existing: Optional[Mapping[tuple[str, str], Any]] = None,
) -> FanOutResult:
    """
    Generate and persist one company menu per qualifying building.

    Buildings missing either structure are skipped and listed in the result.
    A building found in existing has that company menu overwritten instead
    of getting a second one, so the call can be repeated after a failure.
    Writes are issued together; when any of them fails the others still land
    and a single PersistenceFailure carrying the partial result is raised.
    """
    drafts, skipped = plan_company_menus(
        grid, date_range, companies, buildings, service_structures, meal_plan_structures
    )
    existing = existing or {}
    result = FanOutResult(combined_menu_id=combined_menu_id, skipped=skipped)

    writes = []
    for draft in drafts:
        document = draft.to_document(combined_menu_id, status)
        current = existing.get((draft.company_id, draft.building_id))
        if current is not None:
            writes.append(store.update("company_menus", current.id, document))
        else:
            writes.append(store.create("company_menus", document))

    outcomes = await asyncio.gather(*writes, return_exceptions=True)
    for draft, outcome in zip(drafts, outcomes):
        if isinstance(outcome, PersistenceFailure):
            result.failed.append((draft.building_id, outcome))
        elif isinstance(outcome, BaseException):
            raise outcome
        else:
            result.generated.append(outcome)
            if (draft.company_id, draft.building_id) in existing:
                result.updated.append(draft.building_id)

    logger.info(
        f"Fan-out for combined menu {combined_menu_id}: "
        f"{len(result.generated)} generated ({len(result.updated)} updated), {len(result.skipped)} skipped, {len(result.failed)} failed"
    )

    if result.failed:
        failed_ids = ", ".join(building_id for building_id, _ in result.failed)
        raise PersistenceFailure(
            f"Failed to save company menus for building(s): {failed_ids}",
            failures=result.failed,
            result=result,
        )
    return result
