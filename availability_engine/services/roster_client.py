# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Roster client - fetches participants from the upstream roster store.
Errors are raised, never swallowed: the cache counts each one as a failed attempt.
"""

from typing import Any, Optional

import httpx

from availability_engine.core.config import settings
from availability_engine.core.logging import get_logger

logger = get_logger(__name__)


class HttpRosterSupplier:
    """Async roster supplier backed by an HTTP endpoint returning JSON."""

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.url = url or settings.ROSTER_SERVICE_URL
        if not self.url:
            raise ValueError("A roster URL is required (ROSTER_SERVICE_URL)")
        self.timeout = settings.ROSTER_HTTP_TIMEOUT if timeout is None else timeout
        self._client = client

    async def __call__(self) -> list[dict[str, Any]]:
        if self._client is not None:
            resp = await self._client.get(self.url)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(self.url)
        resp.raise_for_status()

        payload = resp.json()
        if isinstance(payload, dict):
            payload = payload.get("participants")
        if not isinstance(payload, list):
            raise ValueError(f"Unexpected roster payload from {self.url}")
        logger.info("Roster fetched: url=%s, records=%d, status=%d", self.url, len(payload), resp.status_code)
        return payload
