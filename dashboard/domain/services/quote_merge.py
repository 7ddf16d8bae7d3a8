"""
Merge batch quote results into holdings.

Only cmp, present value and fundamentals move; investment and qty stay
as seeded. A holding with no matching quote is returned untouched.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Union

from dashboard.domain.models import Holding, QuoteResult

QuoteLike = Union[QuoteResult, Mapping[str, Any]]


def _index_quotes(quotes: Iterable[QuoteLike]) -> Dict[str, QuoteResult]:
    indexed: Dict[str, QuoteResult] = {}
    for quote in quotes:
        if not isinstance(quote, QuoteResult):
            quote = QuoteResult.from_dict(quote)
        # first result wins for repeated symbols
        indexed.setdefault(quote.symbol, quote)
    return indexed


def merge_quote(holding: Holding, quote: QuoteResult) -> Holding:
    cmp = quote.price if quote.price and quote.price > 0 else holding.cmp
    return replace(
        holding,
        cmp=cmp,
        present_value=cmp * holding.qty,
        pe_ratio=quote.pe_ratio if quote.pe_ratio is not None else holding.pe_ratio,
        latest_earnings=quote.earnings_date or holding.latest_earnings,
        market_cap=quote.market_cap if quote.market_cap is not None else holding.market_cap,
    )


def merge_quotes(holdings: Iterable[Holding], quotes: Iterable[QuoteLike]) -> List[Holding]:
    indexed = _index_quotes(quotes)
    merged = []
    for holding in holdings:
        quote = indexed.get(holding.symbol)
        merged.append(merge_quote(holding, quote) if quote is not None else holding)
    return merged
