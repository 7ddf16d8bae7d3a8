"""
Domain Models Package
Export all domain entities
"""

from .portfolio import Holding, PortfolioSnapshot, SectorSummary
from .quotes import Fundamentals, PriceLookup, QuoteResult, UpstreamQuote

__all__ = [
    "Holding",
    "PortfolioSnapshot",
    "SectorSummary",
    "Fundamentals",
    "PriceLookup",
    "QuoteResult",
    "UpstreamQuote",
]
