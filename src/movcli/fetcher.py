"""
Fetcher — one search request, decoded and extracted.

Holds no state between calls beyond the HTTP connection pool.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from movcli.errors import DecodeError, NoResultsError
from movcli.extract import extract
from movcli.models.envelope import SearchEnvelope
from movcli.models.result import Result
from movcli.transport.http import (
    DEFAULT_BASE_URL,
    DEFAULT_SEARCH_PATH,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    HttpClient,
)

logger = logging.getLogger(__name__)


class Fetcher:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        search_path: str = DEFAULT_SEARCH_PATH,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http = HttpClient(
            base_url=base_url,
            search_path=search_path,
            timeout=timeout,
            user_agent=user_agent,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self.http.base_url

    async def fetch(self, query: str) -> list[Result]:
        """Search for ``query``.

        Raises NetworkError, DecodeError, or NoResultsError. No retries.
        """
        logger.debug("searching for %r", query)
        body = await self.http.search(query)
        try:
            envelope = SearchEnvelope.model_validate(body)
        except ValidationError as e:
            raise DecodeError(f"unexpected envelope ({e.error_count()} errors)")
        results = extract(envelope.result.html)
        logger.debug("%d results for %r (server count %d)", len(results), query, envelope.result.count)
        if not results:
            raise NoResultsError(query)
        return results

    async def close(self) -> None:
        await self.http.close()
