"""Abstract table gateway interface (port) for the hosted relational backend.

One gateway serves every managed table; callers pass the table name taken
from an ``EntityDescriptor``. Failures come back as ``GatewayResult.error``
values instead of exceptions.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from portfolio.domain.entities import GatewayResult, OrderClause


class TableGateway(ABC):
    """Port for row storage — implemented in the infrastructure layer."""

    @abstractmethod
    async def select(
        self,
        table: str,
        *,
        order: Sequence[OrderClause] = (),
        filters: Mapping[str, Any] | None = None,
        limit: int | None = None,
    ) -> GatewayResult:
        """Read rows matching equality ``filters`` in ``order``.

        ``data`` is a list of row dicts.
        """
        ...

    @abstractmethod
    async def insert(self, table: str, payload: Mapping[str, Any]) -> GatewayResult:
        """Insert one row; server assigns id and timestamps."""
        ...

    @abstractmethod
    async def update(
        self, table: str, payload: Mapping[str, Any], entity_id: str
    ) -> GatewayResult:
        """Update the row with ``entity_id`` using the given columns."""
        ...

    @abstractmethod
    async def delete(self, table: str, entity_id: str) -> GatewayResult:
        """Delete the row with ``entity_id``."""
        ...

    @abstractmethod
    async def count(
        self, table: str, filters: Mapping[str, Any] | None = None
    ) -> GatewayResult:
        """Count rows matching ``filters``; the number is in ``count``."""
        ...
