"""
Structure resolution: project a combined menu onto one building.

A building only receives the cells whose full path is open on that weekday
in both of its weekly structures and that carry items in the combined menu:

    combined[date][service][meal_plan][sub_meal_plan]
        kept iff  service runs that weekday     (service structure)
              and service -> ... -> meal_plan -> sub_meal_plan is entitled
                                                (meal plan structure)
              and the cell has items            (combined menu)

Resolution depends only on the weekday name of each date, so two Mondays
always resolve against the same slice of the structures.

Sub-services are not cross-checked between the two structures. They are only
walked to reach the meal plans nested under them in the meal plan structure,
so a sub-service missing from the service structure does not exclude its meal
plans as long as the parent service is present there.
"""
from collections.abc import Iterable

from menuhub.services.dates import DateSlot
from menuhub.services.menu_grid import MenuGrid
from menuhub.services.week_structure import MealPlanStructure, ServiceStructure


def project_day(
    grid: MenuGrid,
    service_structure: ServiceStructure,
    meal_plan_structure: MealPlanStructure,
    slot: DateSlot,
    output: MenuGrid,
) -> None:
    """Write one date's filtered subtree into output."""
    day = slot.key
    output.ensure_path(day)

    day_services = service_structure.for_weekday(slot.weekday)
    if not day_services or not meal_plan_structure.for_weekday(slot.weekday):
        return

    for service in day_services:
        service_id = service.service_id
        entitled = meal_plan_structure.service_for_weekday(slot.weekday, service_id)
        if entitled is None or not grid.has_content(day, service_id):
            continue

        for sub_service in entitled.sub_services:
            for meal_plan in sub_service.meal_plans:
                meal_plan_id = meal_plan.meal_plan_id
                if not grid.has_content(day, service_id, meal_plan_id):
                    continue
                output.ensure_path(day, service_id, meal_plan_id)

                for sub_meal_plan in meal_plan.sub_meal_plans:
                    items = grid.get_cell(day, service_id, meal_plan_id, sub_meal_plan.sub_meal_plan_id)
                    if items:
                        output.set_cell(
                            day, service_id, meal_plan_id, sub_meal_plan.sub_meal_plan_id, items
                        )


def project(
    grid: MenuGrid,
    service_structure: ServiceStructure,
    meal_plan_structure: MealPlanStructure,
    date_range: Iterable[DateSlot],
) -> MenuGrid:
    """
    Filtered copy of the grid for one company + building.

    Every date in the range gets a key, possibly empty. A service key is only
    created once a meal plan bucket opens under it. Cells are copied by value;
    the result shares nothing with the input grid.
    """
    output = MenuGrid()
    for slot in date_range:
        project_day(grid, service_structure, meal_plan_structure, slot, output)
    return output
