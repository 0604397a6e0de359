"""Table gateway backed directly by a SQL database through SQLAlchemy.

Rows go in and come out as the same plain dicts the hosted REST gateway
produces (dates as ISO strings, arrays as lists), so controllers cannot tell
the two apart. Each call runs in its own session and transaction.
"""

import logging
from collections.abc import Mapping, Sequence
from datetime import date, datetime
from typing import Any

from sqlalchemy import Date, DateTime, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from portfolio.application.interfaces import TableGateway
from portfolio.domain.entities import GatewayResult, OrderClause
from portfolio.infrastructure.database import models  # noqa: F401  registers the ORM tables
from portfolio.infrastructure.database.base import Base

logger = logging.getLogger(__name__)


class SQLAlchemyTableGateway(TableGateway):
    """Implements the TableGateway port over the ORM models registered on ``Base``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory
        self._models = {
            mapper.class_.__tablename__: mapper.class_ for mapper in Base.registry.mappers
        }

    async def select(
        self,
        table: str,
        *,
        order: Sequence[OrderClause] = (),
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> GatewayResult:
        model = self._models.get(table)
        if model is None:
            return _unknown_table("select", table)
        try:
            stmt = self._filtered(select(model), model, filters)
            for clause in order:
                column = getattr(model, clause.column)
                stmt = stmt.order_by(column.asc() if clause.ascending else column.desc())
            if limit is not None:
                stmt = stmt.limit(limit)
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = [_to_row(m) for m in result.scalars().all()]
        except (AttributeError, OSError, SQLAlchemyError) as exc:
            return _failure("select", table, exc)
        return GatewayResult(data=rows)

    async def insert(self, table: str, payload: Mapping[str, Any]) -> GatewayResult:
        model = self._models.get(table)
        if model is None:
            return _unknown_table("insert", table)
        try:
            instance = model(**_coerce(model, payload))
            async with self._session_factory() as session:
                session.add(instance)
                await session.commit()
                await session.refresh(instance)
                row = _to_row(instance)
        except (TypeError, ValueError, OSError, SQLAlchemyError) as exc:
            return _failure("insert", table, exc)
        logger.debug("Inserted %s row %s", table, row["id"])
        return GatewayResult(data=[row])

    async def update(self, table: str, payload: Mapping[str, Any], entity_id: str) -> GatewayResult:
        model = self._models.get(table)
        if model is None:
            return _unknown_table("update", table)
        try:
            values = _coerce(model, payload)
            async with self._session_factory() as session:
                instance = await session.get(model, entity_id)
                if instance is None:
                    return GatewayResult.failure("update", table, f"No row with id '{entity_id}'", 404)
                for key, value in values.items():
                    setattr(instance, key, value)
                await session.commit()
                await session.refresh(instance)
                row = _to_row(instance)
        except (TypeError, ValueError, OSError, SQLAlchemyError) as exc:
            return _failure("update", table, exc)
        return GatewayResult(data=[row])

    async def delete(self, table: str, entity_id: str) -> GatewayResult:
        model = self._models.get(table)
        if model is None:
            return _unknown_table("delete", table)
        try:
            async with self._session_factory() as session:
                instance = await session.get(model, entity_id)
                if instance is None:
                    return GatewayResult.failure("delete", table, f"No row with id '{entity_id}'", 404)
                await session.delete(instance)
                await session.commit()
        except (OSError, SQLAlchemyError) as exc:
            return _failure("delete", table, exc)
        return GatewayResult()

    async def count(self, table: str, filters: Mapping[str, Any] | None = None) -> GatewayResult:
        model = self._models.get(table)
        if model is None:
            return _unknown_table("count", table)
        try:
            stmt = self._filtered(select(func.count()).select_from(model), model, filters)
            async with self._session_factory() as session:
                total = (await session.execute(stmt)).scalar_one()
        except (AttributeError, OSError, SQLAlchemyError) as exc:
            return _failure("count", table, exc)
        return GatewayResult(count=total)

    @staticmethod
    def _filtered(stmt, model, filters: Mapping[str, Any] | None):
        for column, value in (filters or {}).items():
            attr = getattr(model, column)
            stmt = stmt.where(attr.is_(None) if value is None else attr == value)
        return stmt


def _coerce(model: type[Base], payload: Mapping[str, Any]) -> dict[str, Any]:
    """Turn ISO strings into date/datetime objects for date columns.

    Raises:
        TypeError: For a column the table does not have.
        ValueError: For a malformed date string.
    """
    columns = model.__table__.columns
    values: dict[str, Any] = {}
    for key, value in payload.items():
        if key not in columns:
            raise TypeError(f"Column '{key}' does not exist on {model.__tablename__}")
        column_type = columns[key].type
        if isinstance(value, str) and value:
            if isinstance(column_type, DateTime):
                value = datetime.fromisoformat(value.replace("Z", "+00:00"))
            elif isinstance(column_type, Date):
                value = date.fromisoformat(value[:10])
        elif value == "" and isinstance(column_type, (Date, DateTime)):
            value = None
        values[key] = value
    return values


def _to_row(instance: Base) -> dict[str, Any]:
    row = {}
    for column in instance.__table__.columns:
        value = getattr(instance, column.key)
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        row[column.key] = value
    return row


def _unknown_table(operation: str, table: str) -> GatewayResult:
    logger.error("%s on unknown table %s", operation, table)
    return GatewayResult.failure(operation, table, f"Unknown table '{table}'", 404)


def _failure(operation: str, table: str, exc: Exception) -> GatewayResult:
    logger.error("%s %s failed: %s", operation, table, exc)
    return GatewayResult.failure(operation, table, str(exc))
