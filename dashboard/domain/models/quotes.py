"""
DOMAIN MODELS: QUOTES

Value objects exchanged between the quote fetcher, the batch service
and the HTTP boundary.
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class UpstreamQuote:
    """
    The only part of a provider quote the system relies on:
    a primary price field and a fallback one, either may be missing.
    """
    regular_market_price: Optional[float] = None
    price: Optional[float] = None


@dataclass(frozen=True)
class PriceLookup:
    """
    Outcome of a single price fetch.

    ``price`` is set on success; ``error`` carries the failure reason
    otherwise, so "fetch failed" is never confused with a genuine price.
    """
    symbol: str
    price: Optional[float] = None
    error: Optional[str] = None
    cached: bool = False

    @property
    def ok(self) -> bool:
        return self.price is not None and self.error is None

    @classmethod
    def success(cls, symbol: str, price: float, cached: bool = False) -> "PriceLookup":
        return cls(symbol=symbol, price=price, cached=cached)

    @classmethod
    def failure(cls, symbol: str, reason: str) -> "PriceLookup":
        return cls(symbol=symbol, error=reason)


@dataclass(frozen=True)
class Fundamentals:
    pe_ratio: Optional[float] = None
    earnings_date: Optional[str] = None
    market_cap: Optional[float] = None


@dataclass(frozen=True)
class QuoteResult:
    """
    One record per requested symbol after a batch fetch.
    """
    symbol: Any
    price: float = 0.0
    pe_ratio: Optional[float] = None
    earnings_date: Optional[str] = None
    market_cap: Optional[float] = None

    @classmethod
    def default(cls, symbol: Any) -> "QuoteResult":
        return cls(symbol=symbol)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "price": self.price,
            "peRatio": self.pe_ratio,
            "earningsDate": self.earnings_date,
            "marketCap": self.market_cap,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "QuoteResult":
        """
        Build from the wire form. Raises ValueError for a row that is not
        an object or whose price is not a finite number.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"Malformed quote row: {data!r}")
        try:
            price = float(data.get("price") or 0)
        except (TypeError, ValueError):
            raise ValueError(
                f"Malformed price for {data.get('symbol')!r}: {data.get('price')!r}"
            ) from None
        if not math.isfinite(price):
            raise ValueError(f"Non-finite price for {data.get('symbol')!r}: {price}")

        return cls(
            symbol=data.get("symbol"),
            price=price,
            pe_ratio=data.get("peRatio"),
            earnings_date=data.get("earningsDate"),
            market_cap=data.get("marketCap"),
        )
