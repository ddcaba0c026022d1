from menuhub.models.company import Company, Building
from menuhub.models.catalog import MenuItem, Service, SubService, MealPlan, SubMealPlan
from menuhub.models.structure import StructureAssignment, MealPlanStructureAssignment
from menuhub.models.menu import CombinedMenu, CompanyMenu
from menuhub.models.updation import MenuUpdation

__all__ = [
    "Company",
    "Building",
    "MenuItem",
    "Service",
    "SubService",
    "MealPlan",
    "SubMealPlan",
    "StructureAssignment",
    "MealPlanStructureAssignment",
    "CombinedMenu",
    "CompanyMenu",
    "MenuUpdation",
]
