"""Table gateway over the hosted backend's PostgREST endpoint.

Every call maps to one HTTP request under ``/rest/v1/<table>``. Failures,
HTTP or network, come back as ``GatewayResult`` errors and are never raised.
"""

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from portfolio.application.interfaces import TableGateway
from portfolio.domain.entities import GatewayResult, OrderClause
from portfolio.infrastructure.supabase.http_base import SupabaseHttpBase

logger = logging.getLogger(__name__)


class SupabaseTableGateway(SupabaseHttpBase, TableGateway):
    """Infrastructure adapter: PostgREST over httpx.

    ``access_token`` is the signed-in user's token; row-level security on
    the backend decides what that user may write.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        access_token: str | None = None,
    ):
        super().__init__(base_url, anon_key, http_client=http_client, timeout=timeout)
        self._access_token = access_token

    def with_token(self, access_token: str) -> "SupabaseTableGateway":
        """Copy of this gateway acting as the user behind ``access_token``."""
        return SupabaseTableGateway(
            self._base_url,
            self._anon_key,
            http_client=self._http_client,
            timeout=self._timeout,
            access_token=access_token,
        )

    def _table_url(self, table: str) -> str:
        return f"{self._base_url}/rest/v1/{table}"

    async def select(
        self,
        table: str,
        *,
        order: Sequence[OrderClause] = (),
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> GatewayResult:
        params: dict[str, str] = {"select": "*"}
        params.update(_eq_filters(filters))
        if order:
            params["order"] = ",".join(
                f"{o.column}.{'asc' if o.ascending else 'desc'}" for o in order
            )
        if limit is not None:
            params["limit"] = str(limit)
        return await self._request("select", table, "GET", params=params)

    async def insert(self, table: str, payload: dict[str, Any]) -> GatewayResult:
        return await self._request(
            "insert", table, "POST",
            json=[dict(payload)],
            headers={"Prefer": "return=representation"},
        )

    async def update(self, table: str, payload: dict[str, Any], entity_id: str) -> GatewayResult:
        return await self._request(
            "update", table, "PATCH",
            params={"id": f"eq.{entity_id}"},
            json=dict(payload),
            headers={"Prefer": "return=representation"},
        )

    async def delete(self, table: str, entity_id: str) -> GatewayResult:
        return await self._request("delete", table, "DELETE", params={"id": f"eq.{entity_id}"})

    async def count(self, table: str, filters: dict[str, Any] | None = None) -> GatewayResult:
        params = {"select": "id", **_eq_filters(filters)}
        return await self._request(
            "count", table, "HEAD",
            params=params,
            headers={"Prefer": "count=exact"},
        )

    async def _request(
        self,
        operation: str,
        table: str,
        method: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> GatewayResult:
        request_headers = self._get_headers(self._access_token)
        if headers:
            request_headers.update(headers)

        try:
            response = await self._send(
                method, self._table_url(table), params=params, json=json, headers=request_headers
            )
        except httpx.HTTPError as exc:
            logger.error("%s %s failed: %s", operation, table, exc)
            return GatewayResult.failure(operation, table, f"Network error: {exc}")

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error("%s %s returned %d: %s", operation, table, response.status_code, message)
            return GatewayResult.failure(operation, table, message, response.status_code)

        count = _parse_content_range(response.headers.get("content-range"))
        if method == "HEAD" or not response.content:
            return GatewayResult(data=None, count=count)
        try:
            data = response.json()
        except ValueError:
            logger.error("%s %s returned a non-JSON body (%d)", operation, table, response.status_code)
            return GatewayResult.failure(operation, table, "Invalid JSON response", response.status_code)
        return GatewayResult(data=data, count=count)


def _eq_filters(filters: dict[str, Any] | None) -> dict[str, str]:
    if not filters:
        return {}
    return {
        column: "is.null" if value is None else f"eq.{_literal(value)}"
        for column, value in filters.items()
    }


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _parse_content_range(header: str | None) -> int | None:
    """``0-24/3573`` → 3573; ``*/0`` → 0; unknown totals → None."""
    if not header or "/" not in header:
        return None
    total = header.rsplit("/", 1)[1]
    return int(total) if total.isdigit() else None
