"""Object store over the hosted backend's storage API."""

import logging
from urllib.parse import quote

import httpx

from portfolio.application.interfaces import ObjectStore
from portfolio.domain.entities import GatewayResult
from portfolio.infrastructure.supabase.http_base import SupabaseHttpBase

logger = logging.getLogger(__name__)


class SupabaseObjectStore(SupabaseHttpBase, ObjectStore):
    """Uploads into public buckets under ``/storage/v1/object``."""

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

    def with_token(self, access_token: str) -> "SupabaseObjectStore":
        return SupabaseObjectStore(
            self._base_url,
            self._anon_key,
            http_client=self._http_client,
            timeout=self._timeout,
            access_token=access_token,
        )

    async def upload(
        self, bucket: str, path: str, content: bytes, content_type: str = "application/octet-stream"
    ) -> GatewayResult:
        url = f"{self._base_url}/storage/v1/object/{bucket}/{quote(path)}"
        headers = self._get_headers(self._access_token)
        headers["Content-Type"] = content_type
        headers["x-upsert"] = "false"
        target = f"{bucket}/{path}"

        try:
            response = await self._send("POST", url, content=content, headers=headers)
        except httpx.HTTPError as exc:
            logger.error("Upload to %s failed: %s", target, exc)
            return GatewayResult.failure("upload", target, f"Network error: {exc}")

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error("Upload to %s returned %d: %s", target, response.status_code, message)
            return GatewayResult.failure("upload", target, message, response.status_code)

        logger.debug("Uploaded %d bytes to %s", len(content), target)
        return GatewayResult(data={"path": path})

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{bucket}/{quote(path)}"
