"""
Typed weekly structure trees.

Structure documents arrive as loosely shaped JSON keyed by weekday. They are
validated here, once, so the projector can walk them without further
checks. Field names follow the stored camelCase form via aliases.
"""
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from menuhub.utils.exceptions import MissingStructure
from menuhub.utils.validators import validate_weekday


class _Node(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --- Service structure ---

class SubServiceRef(_Node):
    sub_service_id: str = Field(alias="subServiceId")
    sub_service_name: Optional[str] = Field(default=None, alias="subServiceName")
    rate: float = 0


class ServiceAssignment(_Node):
    service_id: str = Field(alias="serviceId")
    service_name: Optional[str] = Field(default=None, alias="serviceName")
    sub_services: list[SubServiceRef] = Field(default_factory=list, alias="subServices")

    @field_validator("sub_services", mode="before")
    @classmethod
    def expand_bare_ids(cls, value: Any) -> Any:
        # ["SS1"] is shorthand for [{"subServiceId": "SS1"}]
        if isinstance(value, list):
            return [{"subServiceId": v} if isinstance(v, str) else v for v in value]
        return value


# --- Meal plan structure ---

class SubMealPlanRef(_Node):
    sub_meal_plan_id: str = Field(alias="subMealPlanId")
    sub_meal_plan_name: Optional[str] = Field(default=None, alias="subMealPlanName")


class MealPlanEntry(_Node):
    meal_plan_id: str = Field(alias="mealPlanId")
    meal_plan_name: Optional[str] = Field(default=None, alias="mealPlanName")
    sub_meal_plans: list[SubMealPlanRef] = Field(default_factory=list, alias="subMealPlans")


class SubServiceMealPlans(_Node):
    sub_service_id: Optional[str] = Field(default=None, alias="subServiceId")
    sub_service_name: Optional[str] = Field(default=None, alias="subServiceName")
    meal_plans: list[MealPlanEntry] = Field(default_factory=list, alias="mealPlans")


class ServiceMealPlanAssignment(_Node):
    service_id: str = Field(alias="serviceId")
    service_name: Optional[str] = Field(default=None, alias="serviceName")
    sub_services: list[SubServiceMealPlans] = Field(default_factory=list, alias="subServices")


# --- Week containers ---

def _normalize_days(value: Any) -> Any:
    if value is None:
        return {}
    if isinstance(value, dict):
        return {validate_weekday(day): entries or [] for day, entries in value.items()}
    return value


class ServiceStructure(_Node):
    days: dict[str, list[ServiceAssignment]] = Field(default_factory=dict)

    @field_validator("days", mode="before")
    @classmethod
    def normalize_days(cls, value: Any) -> Any:
        return _normalize_days(value)

    @classmethod
    def from_document(cls, week_structure: Optional[dict]) -> "ServiceStructure":
        return cls.model_validate({"days": week_structure})

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)["days"]

    def for_weekday(self, weekday: str) -> list[ServiceAssignment]:
        return self.days.get(weekday, [])


class MealPlanStructure(_Node):
    days: dict[str, list[ServiceMealPlanAssignment]] = Field(default_factory=dict)

    @field_validator("days", mode="before")
    @classmethod
    def normalize_days(cls, value: Any) -> Any:
        return _normalize_days(value)

    @classmethod
    def from_document(cls, week_structure: Optional[dict]) -> "MealPlanStructure":
        return cls.model_validate({"days": week_structure})

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)["days"]

    def for_weekday(self, weekday: str) -> list[ServiceMealPlanAssignment]:
        return self.days.get(weekday, [])

    def service_for_weekday(self, weekday: str, service_id: str) -> Optional[ServiceMealPlanAssignment]:
        """First entry for the service on that weekday, if any"""
        return next(
            (entry for entry in self.for_weekday(weekday) if entry.service_id == service_id),
            None,
        )


# --- Resolution per building ---

@dataclass
class StructurePair:
    company_id: str
    building_id: str
    service_structure: ServiceStructure
    meal_plan_structure: MealPlanStructure


def find_active(assignments: Iterable[Any], company_id: str, building_id: str) -> Optional[Any]:
    """The active assignment for an exact company + building match"""
    return next(
        (
            a for a in assignments
            if a.company_id == company_id and a.building_id == building_id and a.status == "active"
        ),
        None,
    )


def resolve_structure_pair(
    company_id: str,
    building_id: str,
    service_assignments: Iterable[Any],
    meal_plan_assignments: Iterable[Any],
) -> StructurePair:
    """Validated structures for one building; MissingStructure if either is absent."""
    service_assignment = find_active(service_assignments, company_id, building_id)
    meal_plan_assignment = find_active(meal_plan_assignments, company_id, building_id)

    missing = []
    if service_assignment is None:
        missing.append("service structure")
    if meal_plan_assignment is None:
        missing.append("meal plan structure")
    if missing:
        raise MissingStructure(company_id, building_id, missing)

    return StructurePair(
        company_id=company_id,
        building_id=building_id,
        service_structure=ServiceStructure.from_document(service_assignment.week_structure),
        meal_plan_structure=MealPlanStructure.from_document(meal_plan_assignment.week_structure),
    )
