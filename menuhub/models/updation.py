"""
Change log of edits made to a menu after it was saved
"""
from sqlalchemy import Column, String, Integer, Date, Text, JSON
from menuhub.database import Base
from menuhub.models.base import DocumentMixin


class MenuUpdation(DocumentMixin, Base):
    __tablename__ = "updations"

    menu_id = Column(String, nullable=False, index=True)
    menu_type = Column(String, nullable=False)  # combined, company

    # Company menus only
    company_id = Column(String, nullable=True, index=True)
    company_name = Column(String, nullable=True)
    building_id = Column(String, nullable=True)
    building_name = Column(String, nullable=True)

    updation_number = Column(Integer, nullable=False)  # 1st update, 2nd update, ...
    changed_cells = Column(JSON, nullable=False, default=list)
    total_changes = Column(Integer, default=0)

    menu_start_date = Column(Date, nullable=True)
    menu_end_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
