"""
HTTP client for the movhub search endpoint.

The endpoint only answers with JSON when the request looks like a
browser XHR, hence the fixed header set.
"""

from typing import Any, Optional

import httpx

from movcli.errors import DecodeError, NetworkError

DEFAULT_BASE_URL = "https://movhub.ws"
DEFAULT_SEARCH_PATH = "/ajax/film/search"
DEFAULT_TIMEOUT = 10.0
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        search_path: str = DEFAULT_SEARCH_PATH,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._search_path = search_path
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={
                "User-Agent": user_agent,
                "X-Requested-With": "XMLHttpRequest",
                "Accept": "application/json, text/javascript, */*; q=0.01",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def search(self, keyword: str) -> Any:
        """GET the search endpoint and return the decoded JSON body."""
        try:
            resp = await self._client.get(self._search_path, params={"keyword": keyword})
        except httpx.TimeoutException as e:
            raise NetworkError(f"request timed out ({e.__class__.__name__})")
        except httpx.HTTPError as e:
            raise NetworkError(str(e) or e.__class__.__name__)
        if not resp.is_success:
            raise NetworkError(f"HTTP {resp.status_code}: {resp.text[:200]}", {"status": resp.status_code})
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(str(e))

    async def close(self) -> None:
        await self._client.aclose()
