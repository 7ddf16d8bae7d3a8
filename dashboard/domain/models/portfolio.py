"""
DOMAIN MODELS: PORTFOLIO

Immutable structures representing holdings, sector rollups and snapshots.
No market data fetching. No rendering.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Holding:
    """
    A single stock position.

    ``investment`` is fixed at seed time (purchase price × qty) and
    ``present_value`` is owned by the quote merge (cmp × qty). The
    aggregator only fills ``portfolio_percent``, ``gain_loss`` and
    ``gain_loss_percent``.
    """
    no: int
    name: str
    sector: str
    purchase_price: float
    qty: int
    investment: float
    symbol: str
    cmp: float
    present_value: float
    portfolio_percent: float = 0.0
    gain_loss: float = 0.0
    gain_loss_percent: float = 0.0
    pe_ratio: Optional[float] = None
    latest_earnings: Optional[str] = None
    market_cap: Optional[float] = None


@dataclass(frozen=True)
class SectorSummary:
    """
    Rollup over all holdings sharing a sector label.
    """
    sector: str
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
    portfolio_percent: float
    holdings: List[Holding] = field(default_factory=list)


@dataclass(frozen=True)
class PortfolioSnapshot:
    """
    Aggregation result for the whole holding set.
    """
    holdings: List[Holding]
    sectors: List[SectorSummary]
    total_investment: float
    total_present_value: float
    total_gain_loss: float
    total_gain_loss_percent: float
