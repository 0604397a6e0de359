"""Domain entity — result/error pair returned by every gateway call."""

from dataclasses import dataclass
from typing import Any

from portfolio.domain.exceptions import GatewayError


@dataclass
class GatewayResult:
    """Outcome of one remote call.

    ``error`` is set instead of raising; ``data`` holds rows for reads and
    the written row(s) for writes when the backend returns them.
    """

    data: Any = None
    error: GatewayError | None = None
    count: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def rows(self) -> list[dict[str, Any]]:
        if self.data is None:
            return []
        if isinstance(self.data, list):
            return self.data
        return [self.data]

    def unwrap(self) -> Any:
        """Return ``data`` or raise the carried ``GatewayError``."""
        if self.error is not None:
            raise self.error
        return self.data

    @classmethod
    def failure(
        cls, operation: str, target: str, message: str, status_code: int | None = None
    ) -> "GatewayResult":
        return cls(error=GatewayError(operation, target, message, status_code))
