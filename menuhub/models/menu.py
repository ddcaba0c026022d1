"""
Combined (master) menus and the company menus generated from them
"""
from sqlalchemy import Column, String, Date, JSON, ForeignKey
from menuhub.database import Base
from menuhub.models.base import DocumentMixin


class CombinedMenu(DocumentMixin, Base):
    __tablename__ = "combined_menus"

    start_date = Column(Date, nullable=False, index=True)
    end_date = Column(Date, nullable=False, index=True)

    # {date: {serviceId: {mealPlanId: {subMealPlanId: {"menuItemIds": [...]}}}}}
    menu_data = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False, default="active")  # active, draft, archived


class CompanyMenu(DocumentMixin, Base):
    """Point-in-time projection of a combined menu for one building"""
    __tablename__ = "company_menus"

    combined_menu_id = Column(String, ForeignKey("combined_menus.id"), nullable=False, index=True)
    company_id = Column(String, nullable=False, index=True)
    building_id = Column(String, nullable=False, index=True)

    # Snapshot at generation time, not refreshed on rename
    company_name = Column(String, nullable=True)
    building_name = Column(String, nullable=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    menu_data = Column(JSON, nullable=False, default=dict)
    status = Column(String, nullable=False, default="active")
