"""
Catalog models: menu items and the service / meal plan hierarchy.
Grid cells and weekly structures refer to these rows by id only.
"""
from sqlalchemy import Column, String, Integer, Boolean, ForeignKey
from menuhub.database import Base
from menuhub.models.base import DocumentMixin


class MenuItem(DocumentMixin, Base):
    __tablename__ = "menu_items"

    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=True)
    order = Column(Integer, nullable=True)  # display order, unset sorts last
    status = Column(String, nullable=False, default="active")


class Service(DocumentMixin, Base):
    """Catering service, e.g. Breakfast, Lunch"""
    __tablename__ = "services"

    name = Column(String, nullable=False)
    order = Column(Integer, nullable=True)
    status = Column(String, nullable=False, default="active")


class SubService(DocumentMixin, Base):
    """Serving window under a service, e.g. Lunch - Cafeteria"""
    __tablename__ = "sub_services"

    name = Column(String, nullable=False)
    service_id = Column(String, ForeignKey("services.id"), nullable=False, index=True)
    order = Column(Integer, nullable=True)
    status = Column(String, nullable=False, default="active")


class MealPlan(DocumentMixin, Base):
    """Meal plan tier, e.g. Standard, Premium"""
    __tablename__ = "meal_plans"

    name = Column(String, nullable=False)
    order = Column(Integer, nullable=True)
    status = Column(String, nullable=False, default="active")


class SubMealPlan(DocumentMixin, Base):
    __tablename__ = "sub_meal_plans"

    name = Column(String, nullable=False)
    meal_plan_id = Column(String, ForeignKey("meal_plans.id"), nullable=False, index=True)
    order = Column(Integer, nullable=True)
    is_repeat_plan = Column(Boolean, default=False)
    status = Column(String, nullable=False, default="active")
