"""
Shared column helpers for document-style tables
"""
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String


def new_id() -> str:
    return uuid.uuid4().hex


class DocumentMixin:
    """String identity plus audit timestamps, like a document in a store"""

    id = Column(String, primary_key=True, index=True, default=new_id)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
