"""Shared plumbing for the hosted-backend HTTP adapters."""

import httpx


class SupabaseHttpBase:
    """Holds the project URL, anon key and an optional injected httpx client.

    An injected client is reused and never closed here; otherwise a client
    is created per call and closed afterwards.
    """

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self._base_url = base_url.rstrip("/")
        self._anon_key = anon_key
        self._http_client = http_client
        self._timeout = timeout

    def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    def _get_headers(self, access_token: str | None = None) -> dict[str, str]:
        return {
            "apikey": self._anon_key,
            "Authorization": f"Bearer {access_token or self._anon_key}",
        }

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        client = self._get_client()
        should_close = self._http_client is None
        try:
            return await client.request(method, url, **kwargs)
        finally:
            if should_close:
                await client.aclose()

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Best-effort error text from a PostgREST/GoTrue/storage error body."""
        try:
            data = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(data, dict):
            for key in ("message", "error_description", "msg", "error"):
                if data.get(key):
                    return str(data[key])
        return response.text
