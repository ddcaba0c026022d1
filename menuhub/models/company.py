"""
Company and building models
"""
from sqlalchemy import Column, String, Integer, ForeignKey
from menuhub.database import Base
from menuhub.models.base import DocumentMixin


class Company(DocumentMixin, Base):
    __tablename__ = "companies"

    name = Column(String, nullable=False)
    code = Column(String, nullable=True)
    contact_person = Column(String, nullable=True)
    status = Column(String, nullable=False, default="active")


class Building(DocumentMixin, Base):
    __tablename__ = "buildings"

    name = Column(String, nullable=False)
    code = Column(String, nullable=True)
    company_id = Column(String, ForeignKey("companies.id"), nullable=False, index=True)
    floor = Column(String, nullable=True)
    capacity = Column(Integer, nullable=True)
    status = Column(String, nullable=False, default="active")
