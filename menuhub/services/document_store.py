"""
Document store over async SQLAlchemy.

Each collection is one ORM table. Reads return detached model instances
(sessions are created with expire_on_commit=False). Every write runs in its
own session and transaction; batch_write commits several operations in one.
Driver errors surface as PersistenceFailure and are never retried here.
"""
import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from menuhub.models import (
    Building,
    CombinedMenu,
    Company,
    CompanyMenu,
    MealPlan,
    MealPlanStructureAssignment,
    MenuItem,
    MenuUpdation,
    Service,
    StructureAssignment,
    SubMealPlan,
    SubService,
)
from menuhub.utils.exceptions import EntityNotFound, PersistenceFailure

logger = logging.getLogger(__name__)

COLLECTIONS = {
    model.__tablename__: model
    for model in (
        Company,
        Building,
        MenuItem,
        Service,
        SubService,
        MealPlan,
        SubMealPlan,
        StructureAssignment,
        MealPlanStructureAssignment,
        CombinedMenu,
        CompanyMenu,
        MenuUpdation,
    )
}


@dataclass
class WriteOp:
    action: str  # create, update, delete
    collection: str
    doc_id: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, collection: str, data: dict[str, Any]) -> "WriteOp":
        return cls("create", collection, data.get("id"), data)

    @classmethod
    def update(cls, collection: str, doc_id: str, data: dict[str, Any]) -> "WriteOp":
        return cls("update", collection, doc_id, data)

    @classmethod
    def delete(cls, collection: str, doc_id: str) -> "WriteOp":
        return cls("delete", collection, doc_id)


def _model(collection: str):
    try:
        return COLLECTIONS[collection]
    except KeyError:
        raise ValueError(f"Unknown collection {collection!r}")


def _check_fields(model, data: dict[str, Any]) -> None:
    columns = set(inspect(model).columns.keys())
    unknown = set(data) - columns
    if unknown:
        raise ValueError(f"Unknown fields for {model.__tablename__}: {sorted(unknown)}")


class DocumentStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession], serialize_writes: bool = False):
        self._session_factory = session_factory
        # SQLite allows a single writer; queue write transactions instead of failing on lock
        self._write_lock = asyncio.Lock() if serialize_writes else None

    # --- Reads ---

    async def list_all(self, collection: str, order_by: Optional[str] = None) -> list:
        model = _model(collection)
        query = select(model)
        if order_by:
            query = query.order_by(getattr(model, order_by))
        async with self._session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def find(self, collection: str, **filters: Any) -> list:
        """Documents whose fields equal every given filter"""
        model = _model(collection)
        _check_fields(model, filters)
        query = select(model)
        for name, value in filters.items():
            query = query.where(getattr(model, name) == value)
        async with self._session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def get(self, collection: str, doc_id: str):
        async with self._session_factory() as session:
            return await session.get(_model(collection), doc_id)

    async def get_or_raise(self, collection: str, doc_id: str):
        document = await self.get(collection, doc_id)
        if document is None:
            raise EntityNotFound(collection, doc_id)
        return document

    # --- Writes ---

    async def create(self, collection: str, data: dict[str, Any]):
        results = await self.batch_write([WriteOp.create(collection, data)])
        return results[0]

    async def update(self, collection: str, doc_id: str, data: dict[str, Any]):
        results = await self.batch_write([WriteOp.update(collection, doc_id, data)])
        return results[0]

    async def delete(self, collection: str, doc_id: str) -> None:
        await self.batch_write([WriteOp.delete(collection, doc_id)])

    async def batch_write(self, ops: list[WriteOp]) -> list:
        """Apply all operations in one transaction; nothing is kept if one fails."""
        guard = self._write_lock if self._write_lock is not None else contextlib.nullcontext()
        async with guard:
            async with self._session_factory() as session:
                try:
                    results = [await self._apply(session, op) for op in ops]
                    await session.commit()
                except SQLAlchemyError as e:
                    await session.rollback()
                    logger.error(f"Batch of {len(ops)} write(s) rejected: {e}")
                    raise PersistenceFailure(f"Document store rejected write: {e}") from e
                return results

    async def _apply(self, session: AsyncSession, op: WriteOp):
        model = _model(op.collection)

        if op.action == "create":
            _check_fields(model, op.data)
            document = model(**op.data)
            session.add(document)
            await session.flush()
            return document

        document = await session.get(model, op.doc_id)
        if document is None:
            raise EntityNotFound(op.collection, op.doc_id)

        if op.action == "update":
            _check_fields(model, op.data)
            for name, value in op.data.items():
                setattr(document, name, value)
            await session.flush()
            return document

        if op.action == "delete":
            await session.delete(document)
            await session.flush()
            return None

        raise ValueError(f"Unknown write action {op.action!r}")
