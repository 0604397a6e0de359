"""In-memory table gateway for local development and tests.

Behaves like the hosted backend as far as controllers can observe: the
server assigns ``id`` and timestamps, reads are ordered with NULLs after
values in ascending order, and unknown rows are reported as errors.
"""

import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from threading import RLock
from typing import Any

from portfolio.application.interfaces import TableGateway
from portfolio.domain.entities import GatewayResult, OrderClause

# Tables without a created_at column on the hosted backend
_NO_CREATED_AT = frozenset({"statistics"})


class InMemoryTableGateway(TableGateway):
    """Thread-safe dict-of-tables store."""

    def __init__(self, tables: Mapping[str, Sequence[Mapping[str, Any]]] | None = None):
        self._lock = RLock()
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}
        for table, rows in (tables or {}).items():
            self.seed(table, rows)

    def seed(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
        """Insert rows as-is, assigning ids and timestamps only where missing."""
        stored = []
        with self._lock:
            bucket = self._tables.setdefault(table, {})
            for row in rows:
                record = self._stamp(table, dict(row))
                bucket[record["id"]] = record
                stored.append(dict(record))
        return stored

    def rows(self, table: str) -> list[dict[str, Any]]:
        """Unordered snapshot of a table."""
        with self._lock:
            return [dict(r) for r in self._tables.get(table, {}).values()]

    async def select(
        self,
        table: str,
        *,
        order: Sequence[OrderClause] = (),
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> GatewayResult:
        with self._lock:
            items = [dict(r) for r in self._tables.get(table, {}).values()]

        items = [r for r in items if _matches(r, filters)]
        # Stable sorts applied last-clause-first give a multi-key ordering
        for clause in reversed(order):
            items.sort(key=lambda r, c=clause.column: _sort_key(r.get(c)), reverse=not clause.ascending)
        if limit is not None:
            items = items[:limit]
        return GatewayResult(data=items)

    async def insert(self, table: str, payload: Mapping[str, Any]) -> GatewayResult:
        record = dict(payload)
        record.pop("id", None)
        with self._lock:
            record = self._stamp(table, record)
            self._tables.setdefault(table, {})[record["id"]] = record
            return GatewayResult(data=[dict(record)])

    async def update(self, table: str, payload: Mapping[str, Any], entity_id: str) -> GatewayResult:
        with self._lock:
            existing = self._tables.get(table, {}).get(str(entity_id))
            if existing is None:
                return GatewayResult.failure("update", table, f"No row with id '{entity_id}'", 404)
            updated = {**existing, **payload, "id": existing["id"]}
            updated["updated_at"] = _now()
            self._tables[table][existing["id"]] = updated
            return GatewayResult(data=[dict(updated)])

    async def delete(self, table: str, entity_id: str) -> GatewayResult:
        with self._lock:
            removed = self._tables.get(table, {}).pop(str(entity_id), None)
        if removed is None:
            return GatewayResult.failure("delete", table, f"No row with id '{entity_id}'", 404)
        return GatewayResult()

    async def count(self, table: str, filters: Mapping[str, Any] | None = None) -> GatewayResult:
        with self._lock:
            total = sum(1 for r in self._tables.get(table, {}).values() if _matches(r, filters))
        return GatewayResult(count=total)

    def _stamp(self, table: str, record: dict[str, Any]) -> dict[str, Any]:
        record["id"] = str(record.get("id") or uuid.uuid4())
        now = _now()
        if table not in _NO_CREATED_AT:
            record.setdefault("created_at", now)
        record.setdefault("updated_at", now)
        return record


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(row: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
    if not filters:
        return True
    return all(row.get(column) == value for column, value in filters.items())


def _sort_key(value: Any) -> tuple[bool, Any]:
    # NULLs sort after values ascending (and so before them descending)
    return (value is None, value if value is not None else 0)
