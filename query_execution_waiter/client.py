from typing import Optional, Protocol

import aiohttp
from loguru import logger
from query_execution_waiter.models import QueryExecutionStatus


class QueryExecutionStatusClient(Protocol):
    async def get_query_execution_status(
        self, query_execution_id: str
    ) -> QueryExecutionStatus: ...


class HttpQueryExecutionClient:
    """Reads query execution status from the query service over HTTP.

    Use it as an async context manager to share one session across polls;
    otherwise every request opens its own session.
    """

    def __init__(self, base_url: str, session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session
        self._owns_session = False
        self.logger = logger

    async def __aenter__(self) -> "HttpQueryExecutionClient":
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None
            self._owns_session = False

    async def _fetch(
        self, session: aiohttp.ClientSession, url: str
    ) -> QueryExecutionStatus:
        try:
            async with session.get(url) as response:
                response.raise_for_status()
                data = await response.json()
                return QueryExecutionStatus.from_response(data)
        except aiohttp.ClientResponseError as e:
            self.logger.error(f"HTTP error {e.status} at {url}: {e.message}")
            raise

    async def get_query_execution_status(
        self, query_execution_id: str
    ) -> QueryExecutionStatus:
        """Fetches the current status of a query execution from the server"""
        url = f"{self.base_url}/query-executions/{query_execution_id}"
        if self.session is not None:
            return await self._fetch(self.session, url)
        async with aiohttp.ClientSession() as session:
            return await self._fetch(session, url)
