"""
PORTFOLIO AGGREGATOR
Holdings → sector rollups → portfolio totals

RESPONSIBILITIES:
- Grand totals for investment and present value
- Group holdings by sector (first-seen order)
- Derive gain/loss, gain/loss % and portfolio share at every level

RULES:
❌ No recomputing present value from cmp × qty (the quote merge owns it)
❌ No division by zero: a zero denominator yields 0
✅ Pure: same input, same snapshot
"""

from dataclasses import replace
from typing import Dict, Iterable, List

from dashboard.domain.models import Holding, PortfolioSnapshot, SectorSummary


def percent_of(part: float, whole: float) -> float:
    """Return ``part`` as a percentage of ``whole``; 0 when ``whole`` is not positive."""
    if whole > 0:
        return (part / whole) * 100
    return 0.0


def aggregate(holdings: Iterable[Holding]) -> PortfolioSnapshot:
    """
    Build a full portfolio snapshot from holdings.

    Args:
        holdings: Holdings with investment and present value set

    Returns:
        PortfolioSnapshot with derived per-holding fields, sector
        summaries and grand totals
    """
    holdings = list(holdings)

    total_investment = sum(h.investment for h in holdings)
    total_present_value = sum(h.present_value for h in holdings)
    total_gain_loss = total_present_value - total_investment

    updated = [
        replace(
            h,
            portfolio_percent=percent_of(h.investment, total_investment),
            gain_loss=h.present_value - h.investment,
            gain_loss_percent=percent_of(h.present_value - h.investment, h.investment),
        )
        for h in holdings
    ]

    # dicts keep insertion order, which gives first-seen sector order
    by_sector: Dict[str, List[Holding]] = {}
    for holding in updated:
        by_sector.setdefault(holding.sector, []).append(holding)

    sectors = [
        _summarize_sector(sector, members, total_investment)
        for sector, members in by_sector.items()
    ]

    return PortfolioSnapshot(
        holdings=updated,
        sectors=sectors,
        total_investment=total_investment,
        total_present_value=total_present_value,
        total_gain_loss=total_gain_loss,
        total_gain_loss_percent=percent_of(total_gain_loss, total_investment),
    )


def _summarize_sector(
    sector: str,
    members: List[Holding],
    total_investment: float,
) -> SectorSummary:
    investment = sum(h.investment for h in members)
    present_value = sum(h.present_value for h in members)
    gain_loss = present_value - investment

    return SectorSummary(
        sector=sector,
        total_investment=investment,
        total_present_value=present_value,
        total_gain_loss=gain_loss,
        total_gain_loss_percent=percent_of(gain_loss, investment),
        portfolio_percent=percent_of(investment, total_investment),
        holdings=members,
    )
