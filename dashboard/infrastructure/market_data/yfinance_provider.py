"""
YFinance Quote Source
Narrow adapter over Yahoo Finance for NSE/BSE equities
"""

import logging
from typing import Any, Optional

import yfinance as yf

from dashboard.domain.models import UpstreamQuote

logger = logging.getLogger(__name__)


def _as_price(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    # yfinance reports missing values as NaN
    if price != price:
        return None
    return price


class YFinanceQuoteSource:
    """
    Yahoo Finance quote source.
    Blocking; callers offload it to a worker thread.
    """

    def quote(self, symbol: str) -> UpstreamQuote:
        ticker = yf.Ticker(symbol)
        fast_info = ticker.fast_info or {}

        primary = _as_price(fast_info.get("lastPrice"))
        if primary is not None:
            return UpstreamQuote(regular_market_price=primary)

        # fast_info can be empty for thinly traded symbols; the full info
        # payload is slower but sometimes carries a price
        info = ticker.info or {}
        logger.debug("fast_info had no price for %s, falling back to info", symbol)
        return UpstreamQuote(
            regular_market_price=_as_price(info.get("regularMarketPrice")),
            price=_as_price(info.get("currentPrice")),
        )
