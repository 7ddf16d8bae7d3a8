"""
Quote Fetcher
Best-effort current price for one symbol, cache first.
"""

import asyncio
import logging
import math
from typing import Optional

from dashboard.domain.models import Fundamentals, PriceLookup, UpstreamQuote
from dashboard.infrastructure.market_data.quote_cache import QuoteCache
from dashboard.infrastructure.market_data.types import QuoteSource

logger = logging.getLogger(__name__)


class QuoteFetcher:
    """
    Resolves prices through the quote source, with a short-lived cache.

    Provider errors never escape: every failure becomes a failed
    PriceLookup carrying the reason.
    """

    def __init__(
        self,
        source: QuoteSource,
        cache: Optional[QuoteCache] = None,
        default_suffix: str = ".NS",
        timeout_seconds: float = 5.0,
    ):
        self.source = source
        self.cache = cache if cache is not None else QuoteCache()
        self.default_suffix = default_suffix
        self.timeout_seconds = timeout_seconds

    def normalize_symbol(self, symbol: str) -> str:
        """
        Map a holding symbol to the provider's form.

        Bare tickers are assumed to trade on the default exchange, so
        ``HDFCBANK`` becomes ``HDFCBANK.NS``; ``KPIGREEN.BO`` is kept.
        """
        symbol = symbol.strip()
        if "." in symbol:
            return symbol
        return f"{symbol}{self.default_suffix}"

    @staticmethod
    def extract_price(quote: UpstreamQuote) -> Optional[float]:
        price = quote.regular_market_price or quote.price
        if price is None or not math.isfinite(price) or price <= 0:
            return None
        return float(price)

    async def fetch_price(self, symbol: str) -> PriceLookup:
        try:
            # keyed by the caller's symbol, not the provider form
            cached = self.cache.get(symbol)
            if cached is not None:
                return PriceLookup.success(symbol, cached, cached=True)

            search_symbol = self.normalize_symbol(symbol)
            quote = await asyncio.wait_for(
                asyncio.to_thread(self.source.quote, search_symbol),
                timeout=self.timeout_seconds,
            )
            if not isinstance(quote, UpstreamQuote):
                raise TypeError(f"unexpected quote payload: {type(quote).__name__}")

            price = self.extract_price(quote)
            if price is None:
                logger.warning("No price in quote for %s (%s)", symbol, search_symbol)
                return PriceLookup.failure(symbol, "no price")

            self.cache.set(symbol, price)
            return PriceLookup.success(symbol, price)

        except asyncio.TimeoutError:
            logger.error(
                "Timed out fetching quote for %s after %.1fs", symbol, self.timeout_seconds
            )
            return PriceLookup.failure(symbol, "timeout")
        except Exception as e:
            logger.error(f"Error fetching quote for {symbol}: {e}")
            return PriceLookup.failure(symbol, str(e) or type(e).__name__)

    async def fetch_fundamentals(self, symbol: str) -> Fundamentals:
        """
        P/E, earnings date and market cap.

        No upstream source is wired yet, so every field is None.
        """
        return Fundamentals()
