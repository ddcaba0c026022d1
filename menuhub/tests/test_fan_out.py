"""
Tests for generating company menus from a combined menu
"""
import pytest

from menuhub.models import Building, Company, MealPlanStructureAssignment, StructureAssignment
from menuhub.services.dates import expand_date_range
from menuhub.services.fan_out import existing_by_building, generate_all, plan_company_menus
from menuhub.services.menu_grid import MenuGrid
from menuhub.utils.exceptions import PersistenceFailure


MONDAY = "2025-06-02"


def _grid():
    grid = MenuGrid()
    grid.set_cell(MONDAY, "S1", "M1", "SM1", ["I1", "I2"])
    grid.set_cell(MONDAY, "S1", "M2", "SM1", ["I3"])
    return grid


def _structures(weeks, building_ids, company_id="C1"):
    service = [
        StructureAssignment(
            company_id=company_id, building_id=b, week_structure=weeks["service"]("monday"), status="active"
        )
        for b in building_ids
    ]
    meal_plan = [
        MealPlanStructureAssignment(
            company_id=company_id, building_id=b, week_structure=weeks["meal_plan"]("monday"), status="active"
        )
        for b in building_ids
    ]
    return service, meal_plan


@pytest.fixture()
def directory():
    companies = [
        Company(id="C1", name="Acme", status="active"),
        Company(id="C3", name="Initech", status="inactive"),
    ]
    buildings = [
        Building(id="B1", name="Acme Tower", company_id="C1", status="active"),
        Building(id="B2", name="Acme Annex", company_id="C1", status="active"),
        Building(id="B3", name="Acme Depot", company_id="C1", status="active"),
        Building(id="B9", name="Acme Old Wing", company_id="C1", status="inactive"),
        Building(id="B5", name="Initech Plant", company_id="C3", status="active"),
    ]
    return companies, buildings


class TestPlan:
    def test_buildings_without_structures_are_skipped(self, directory, weeks):
        companies, buildings = directory
        service, meal_plan = _structures(weeks, ["B1", "B3"])
        meal_plan = [m for m in meal_plan if m.building_id != "B3"]

        drafts, skipped = plan_company_menus(
            _grid(), expand_date_range(MONDAY, MONDAY), companies, buildings, service, meal_plan
        )

        assert [d.building_id for d in drafts] == ["B1"]
        assert [s.building_id for s in skipped] == ["B2", "B3"]
        assert "service structure or meal plan structure" in skipped[0].reason
        assert "meal plan structure" in skipped[1].reason

    def test_inactive_companies_and_buildings_are_ignored(self, directory, weeks):
        companies, buildings = directory
        service, meal_plan = _structures(weeks, ["B1", "B2", "B3", "B9"])
        more_service, more_meal_plan = _structures(weeks, ["B5"], company_id="C3")

        drafts, skipped = plan_company_menus(
            _grid(),
            expand_date_range(MONDAY, MONDAY),
            companies,
            buildings,
            service + more_service,
            meal_plan + more_meal_plan,
        )

        assert {d.building_id for d in drafts} == {"B1", "B2", "B3"}
        assert skipped == []

    def test_drafts_carry_projection_and_snapshot_names(self, directory, weeks):
        companies, buildings = directory
        service, meal_plan = _structures(weeks, ["B1"])

        drafts, _ = plan_company_menus(
            _grid(), expand_date_range(MONDAY, "2025-06-03"), companies, buildings, service, meal_plan
        )

        document = drafts[0].to_document("CM1")
        assert document["company_name"] == "Acme"
        assert document["building_name"] == "Acme Tower"
        assert document["combined_menu_id"] == "CM1"
        assert str(document["end_date"]) == "2025-06-03"
        assert document["menu_data"] == {
            MONDAY: {"S1": {"M1": {"SM1": {"menuItemIds": ["I1", "I2"]}}}},
            "2025-06-03": {},
        }


class TestGenerateAll:
    async def test_one_menu_per_configured_building(self, store, seed_data, catalog):
        result = await generate_all(
            store,
            "CM1",
            _grid(),
            expand_date_range(MONDAY, MONDAY),
            await catalog.active_companies(),
            await catalog.active_buildings(),
            await catalog.service_structures(),
            await catalog.meal_plan_structures(),
        )

        assert sorted(m.building_id for m in result.generated) == ["B1", "B2", "B4"]
        assert result.skipped_count == 1
        assert result.summary() == {"generated": 3, "skipped": 1, "failed": 0}

        stored = await store.find("company_menus", combined_menu_id="CM1")
        assert len(stored) == 3
        assert all(m.menu_data[MONDAY] == {"S1": {"M1": {"SM1": {"menuItemIds": ["I1", "I2"]}}}} for m in stored)

    async def test_failed_write_does_not_block_siblings(self, store, seed_data, catalog, monkeypatch):
        original_create = store.create

        async def flaky_create(collection, data):
            if data.get("building_id") == "B2":
                raise PersistenceFailure("disk full")
            return await original_create(collection, data)

        monkeypatch.setattr(store, "create", flaky_create)

        with pytest.raises(PersistenceFailure, match="B2") as exc_info:
            await generate_all(
                store,
                "CM1",
                _grid(),
                expand_date_range(MONDAY, MONDAY),
                await catalog.active_companies(),
                await catalog.active_buildings(),
                await catalog.service_structures(),
                await catalog.meal_plan_structures(),
            )

        result = exc_info.value.result
        assert [b for b, _ in result.failed] == ["B2"]
        assert sorted(m.building_id for m in result.generated) == ["B1", "B4"]

        stored = await store.find("company_menus", combined_menu_id="CM1")
        assert sorted(m.building_id for m in stored) == ["B1", "B4"]

    async def test_existing_menus_are_overwritten_not_duplicated(self, store, seed_data, catalog):
        args = (
            _grid(),
            expand_date_range(MONDAY, MONDAY),
            await catalog.active_companies(),
            await catalog.active_buildings(),
            await catalog.service_structures(),
            await catalog.meal_plan_structures(),
        )
        first = await generate_all(store, "CM1", *args)
        (b1_menu,) = [m for m in first.generated if m.building_id == "B1"]
        await store.delete("company_menus", [m for m in first.generated if m.building_id == "B2"][0].id)

        existing = existing_by_building(await store.find("company_menus", combined_menu_id="CM1"))
        second = await generate_all(store, "CM1", *args, existing=existing)

        assert second.combined_menu_id == "CM1"
        assert sorted(second.updated) == ["B1", "B4"]
        stored = await store.find("company_menus", combined_menu_id="CM1")
        assert sorted(m.building_id for m in stored) == ["B1", "B2", "B4"]
        assert b1_menu.id in {m.id for m in stored}
