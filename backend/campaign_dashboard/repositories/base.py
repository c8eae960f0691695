"""
Generic repository over an async SQLAlchemy session.

Every public method returns a ``Result``. Storage failures are logged and
surfaced as ``Err(PersistenceError)`` carrying the driver message; writes only
flush, committing is left to ``UnitOfWork``.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import Base
from ..errors import NotFoundError, PersistenceError
from ..mappers import from_persistence, to_persistence
from ..result import Err, Ok, Result

logger = logging.getLogger(__name__)

E = TypeVar("E")


def persistence_failure(action: str, exc: Exception) -> Err:
    logger.error(f"[repo] {action} failed: {exc}")
    return Err(PersistenceError(f"{action} failed: {exc}", details=type(exc).__name__))


class BaseRepository(Generic[E]):
    model: type[Base]
    entity: type[E]

    def __init__(self, session: AsyncSession):
        self.session = session

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_entity(self, row: Any) -> E:
        return from_persistence(self.entity, row)

    def _primary_key(self, entity: E) -> Any:
        return getattr(entity, "id")

    async def find_by_id(self, entity_id: Any) -> Result[E | None]:
        try:
            row = await self.session.get(self.model, entity_id)
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.find_by_id", exc)
        return Ok(self.to_entity(row) if row is not None else None)

    async def find_one_by(self, **criteria: Any) -> Result[E | None]:
        query = select(self.model).filter_by(**criteria).limit(1)
        try:
            row = await self.session.scalar(query)
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.find_one_by", exc)
        return Ok(self.to_entity(row) if row is not None else None)

    async def find_all_by(self, order_by: Any = None, **criteria: Any) -> Result[list[E]]:
        query = select(self.model).filter_by(**criteria)
        if order_by is not None:
            query = query.order_by(order_by)
        try:
            rows = (await self.session.scalars(query)).all()
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.find_all_by", exc)
        return Ok([self.to_entity(row) for row in rows])

    async def create(self, entity: E) -> Result[E]:
        try:
            self.session.add(self.model(**to_persistence(entity)))
            await self.session.flush()
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.create", exc)
        return Ok(entity)

    async def update(self, entity: E) -> Result[E]:
        key = self._primary_key(entity)
        try:
            row = await self.session.get(self.model, key)
            if row is None:
                return Err(NotFoundError(f"{self.model.__name__} {key} not found"))
            for column, value in to_persistence(entity).items():
                setattr(row, column, value)
            await self.session.flush()
        except SQLAlchemyError as exc:
            return persistence_failure(f"{self.name}.update", exc)
        return Ok(entity)


class UnitOfWork:
    """Commit/rollback boundary shared by the repositories of one request."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def commit(self) -> Result[None]:
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            return persistence_failure("commit", exc)
        return Ok(None)

    async def rollback(self) -> None:
        await self.session.rollback()

    async def run(self, work: Callable[[], Any]) -> Result[Any]:
        """Await ``work`` and commit its writes, or roll all of them back on any failure."""
        try:
            result = await work()
        except Exception:
            await self.session.rollback()
            raise
        if result.is_err():
            await self.session.rollback()
            return result
        committed = await self.commit()
        return committed if committed.is_err() else result
