"""
Batch Quote Service
Fetch quotes for many symbols with bounded concurrency.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, List, Sequence

from dashboard.domain.models import QuoteResult
from dashboard.services.quote_fetcher import QuoteFetcher

logger = logging.getLogger(__name__)


class BatchQuoteService:
    """
    Groups symbols into fixed-size batches.

    Members of a batch are fetched concurrently, batches run one after
    another with a pause in between to stay under upstream rate limits.
    A failing symbol yields a default result; the batch never fails.
    """

    def __init__(
        self,
        fetcher: QuoteFetcher,
        batch_size: int = 5,
        pause_seconds: float = 0.5,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.fetcher = fetcher
        self.batch_size = batch_size
        self.pause_seconds = pause_seconds
        self._sleep = sleep

    async def fetch_quote(self, symbol: Any) -> QuoteResult:
        try:
            lookup, fundamentals = await asyncio.gather(
                self.fetcher.fetch_price(symbol),
                self.fetcher.fetch_fundamentals(symbol),
            )
            return QuoteResult(
                symbol=symbol,
                price=lookup.price if lookup.ok else 0.0,
                pe_ratio=fundamentals.pe_ratio,
                earnings_date=fundamentals.earnings_date,
                market_cap=fundamentals.market_cap,
            )
        except Exception as e:
            logger.error(f"Error fetching {symbol}: {e}")
            return QuoteResult.default(symbol)

    async def fetch_batch(self, symbols: Sequence[Any]) -> List[QuoteResult]:
        results: List[QuoteResult] = []

        for start in range(0, len(symbols), self.batch_size):
            group = symbols[start:start + self.batch_size]
            results.extend(
                await asyncio.gather(*(self.fetch_quote(s) for s in group))
            )

            if start + self.batch_size < len(symbols):
                await self._sleep(self.pause_seconds)

        return results
