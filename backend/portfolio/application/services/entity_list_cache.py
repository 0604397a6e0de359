"""Entity list cache — local ordered copy of one remote table."""

import logging
from typing import Any

from portfolio.application.interfaces import TableGateway
from portfolio.domain.entities import EntityDescriptor, GatewayResult
from portfolio.domain.exceptions import GatewayError
from portfolio.infrastructure.logging.activity_logger import ActivityLogger, ActivityStage

logger = logging.getLogger(__name__)
alog = ActivityLogger(__name__)


class EntityListCache:
    """Holds the last successful full read of a table, in gateway order.

    The list is only ever replaced wholesale by :meth:`refresh`; it is never
    patched locally or re-sorted.
    """

    def __init__(self, descriptor: EntityDescriptor, gateway: TableGateway):
        self._descriptor = descriptor
        self._gateway = gateway
        self._items: tuple[dict[str, Any], ...] = ()
        self._loaded = False
        self.last_error: GatewayError | None = None

    @property
    def items(self) -> tuple[dict[str, Any], ...]:
        return self._items

    @property
    def loaded(self) -> bool:
        """True once at least one refresh has succeeded."""
        return self._loaded

    def get(self, entity_id: str) -> dict[str, Any] | None:
        for item in self._items:
            if str(item.get("id")) == str(entity_id):
                return item
        return None

    async def refresh(self) -> bool:
        """Re-read the table; on failure the previous list stays in place."""
        table = self._descriptor.table
        alog.step_start(ActivityStage.FETCH, f"Loading {self._descriptor.plural}")
        try:
            result = await self._gateway.select(table, order=self._descriptor.order)
        except GatewayError as exc:
            result = GatewayResult(error=exc)
        except Exception as exc:
            logger.exception("select %s raised instead of returning an error", table)
            result = GatewayResult.failure("select", table, f"{type(exc).__name__}: {exc}")

        if not result.ok:
            self.last_error = result.error
            alog.step_error(ActivityStage.FETCH, f"Failed to load {table}", error=result.error)
            return False

        self._items = tuple(result.rows)
        self._loaded = True
        self.last_error = None
        alog.step_complete(ActivityStage.FETCH, f"Loaded {self._descriptor.plural}", count=len(self._items))
        return True

    def __len__(self) -> int:
        return len(self._items)
