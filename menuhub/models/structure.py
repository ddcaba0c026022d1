"""
Weekly structure assignments per company + building.

Both kinds store their recurrence tree as JSON keyed by weekday name
("monday" ... "sunday"). The JSON is validated into typed trees by
menuhub.services.week_structure before the engine reads it.
"""
from sqlalchemy import Column, String, JSON, ForeignKey
from menuhub.database import Base
from menuhub.models.base import DocumentMixin


class StructureAssignment(DocumentMixin, Base):
    """Which services / sub-services run on each weekday"""
    __tablename__ = "structure_assignments"

    company_id = Column(String, ForeignKey("companies.id"), nullable=False, index=True)
    building_id = Column(String, ForeignKey("buildings.id"), nullable=False, index=True)
    company_name = Column(String, nullable=True)
    building_name = Column(String, nullable=True)

    # {"monday": [{"serviceId": "S1", "subServices": [{"subServiceId": "SS1", "rate": 0}]}]}
    week_structure = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False, default="active")


class MealPlanStructureAssignment(DocumentMixin, Base):
    """Which meal plans / sub meal plans are entitled under each service per weekday"""
    __tablename__ = "meal_plan_structure_assignments"

    company_id = Column(String, ForeignKey("companies.id"), nullable=False, index=True)
    building_id = Column(String, ForeignKey("buildings.id"), nullable=False, index=True)
    company_name = Column(String, nullable=True)
    building_name = Column(String, nullable=True)

    # {"monday": [{"serviceId": "S1", "subServices": [{"subServiceId": "SS1",
    #   "mealPlans": [{"mealPlanId": "M1", "subMealPlans": [{"subMealPlanId": "SM1"}]}]}]}]}
    week_structure = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False, default="active")
