"""Auth provider over the hosted backend's auth API (``/auth/v1``)."""

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from portfolio.application.interfaces import AuthProvider
from portfolio.domain.entities import AuthSession, AuthUser
from portfolio.domain.exceptions import AuthError
from portfolio.infrastructure.supabase.http_base import SupabaseHttpBase

logger = logging.getLogger(__name__)


class SupabaseAuthClient(SupabaseHttpBase, AuthProvider):
    """Password auth against the hosted auth module."""

    async def sign_in(self, email: str, password: str) -> AuthSession:
        data = await self._call(
            "POST", "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return _parse_session(data)

    async def sign_up(self, email: str, password: str, redirect_to: str) -> AuthUser:
        data = await self._call(
            "POST", "/signup",
            params={"redirect_to": redirect_to},
            json={"email": email, "password": password},
        )
        # Auto-confirmed projects wrap the user in a session
        user = data.get("user", data) if isinstance(data, dict) else {}
        return _parse_user(user)

    async def get_session(self, access_token: str) -> AuthSession | None:
        try:
            data = await self._call("GET", "/user", access_token=access_token)
        except AuthError as exc:
            logger.debug("Token rejected: %s", exc)
            return None
        return AuthSession(access_token=access_token, user=_parse_user(data))

    async def sign_out(self, access_token: str) -> None:
        try:
            await self._call("POST", "/logout", access_token=access_token)
        except AuthError as exc:
            logger.warning("Sign-out was rejected: %s", exc)

    async def _call(
        self,
        method: str,
        endpoint: str,
        *,
        access_token: str | None = None,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        url = f"{self._base_url}/auth/v1{endpoint}"
        try:
            response = await self._send(
                method, url, params=params, json=json, headers=self._get_headers(access_token)
            )
        except httpx.HTTPError as exc:
            raise AuthError(f"Auth service unreachable: {exc}", status_code=503) from exc

        if response.status_code >= 400:
            status = 401 if response.status_code < 500 else 502
            raise AuthError(self._error_message(response), status_code=status)
        if not response.content:
            return {}
        return response.json()


def _parse_user(data: dict[str, Any]) -> AuthUser:
    try:
        return AuthUser(
            id=str(data["id"]),
            email=data.get("email") or "",
            confirmed=bool(data.get("email_confirmed_at") or data.get("confirmed_at")),
        )
    except KeyError as exc:
        raise AuthError("Malformed user in auth response", status_code=502) from exc


def _parse_session(data: dict[str, Any]) -> AuthSession:
    if "access_token" not in data:
        raise AuthError("Malformed session in auth response", status_code=502)
    expires_at = data.get("expires_at")
    return AuthSession(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc) if expires_at else None,
        user=_parse_user(data.get("user") or {}),
    )
