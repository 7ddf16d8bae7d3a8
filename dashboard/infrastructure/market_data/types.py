"""
Quote source protocol for type hints.
"""

from __future__ import annotations

from typing import Protocol

from dashboard.domain.models import UpstreamQuote


class QuoteSource(Protocol):
    def quote(self, symbol: str) -> UpstreamQuote:
        """Blocking call to the external provider; may raise."""
        ...
