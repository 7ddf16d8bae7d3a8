"""
HTTP client for the quote proxy.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

logger = logging.getLogger(__name__)

BATCH_PATH = "/api/stocks/batch"


class QuotesApiClient:
    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout_seconds)

    async def fetch_batch(self, symbols: Sequence[str]) -> List[Dict[str, Any]]:
        """
        POST the symbols and return the raw quote records.

        Raises:
            httpx.HTTPError: transport failure or non-2xx response
            ValueError: response body is not a JSON list
        """
        resp = await self._client.post(BATCH_PATH, json={"symbols": list(symbols)})
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, list):
            raise ValueError(f"Unexpected batch response: {type(payload).__name__}")
        logger.debug("Received %d quotes from %s", len(payload), self.base_url)
        return payload

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "QuotesApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.aclose()
        return False
