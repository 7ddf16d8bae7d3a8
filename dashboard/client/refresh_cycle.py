"""
Periodic quote refresh for the dashboard view.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

import httpx
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from dashboard.domain.models import Holding, PortfolioSnapshot
from dashboard.domain.services.portfolio_aggregator import aggregate
from dashboard.domain.services.quote_merge import merge_quotes

logger = logging.getLogger(__name__)

STALE_DATA_MESSAGE = "Failed to fetch stock data. Using cached values."
REFRESH_JOB_ID = "portfolio_refresh"

# (snapshot, error, loading)
UpdateHandler = Callable[[PortfolioSnapshot, Optional[str], bool], Any]


class BatchQuoteClient(Protocol):
    async def fetch_batch(self, symbols: Sequence[str]) -> List[Dict[str, Any]]:
        ...


class RefreshCycle:
    """
    Pulls quotes on a fixed interval, merges them into the holdings and
    re-aggregates.

    ``on_update`` fires when a refresh starts (``loading`` True) and again
    when it lands or fails. Each refresh carries a sequence number; a result that completes after
    a newer one has been applied is dropped. After ``stop()`` no tick
    fires and in-flight refreshes finish without touching state.
    """

    def __init__(
        self,
        holdings: Sequence[Holding],
        client: BatchQuoteClient,
        interval_seconds: float = 15.0,
        on_update: Optional[UpdateHandler] = None,
    ):
        self._holdings: List[Holding] = list(holdings)
        self._client = client
        self._interval_seconds = interval_seconds
        self._on_update = on_update
        self._snapshot = aggregate(self._holdings)
        self._scheduler: Optional[AsyncIOScheduler] = None
        self._sequence = 0
        self._applied_sequence = 0
        self._stopped = False
        self.error: Optional[str] = None
        self.loading = False

    @property
    def holdings(self) -> List[Holding]:
        return list(self._holdings)

    @property
    def snapshot(self) -> PortfolioSnapshot:
        return self._snapshot

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def refresh_once(self) -> bool:
        """
        Run a single refresh.

        Returns True when quotes were merged, False when the request
        failed or the result was discarded.
        """
        if self._stopped:
            return False

        self._sequence += 1
        seq = self._sequence
        symbols = [h.symbol for h in self._holdings]
        self.loading = True
        self._notify()

        try:
            quotes = await self._client.fetch_batch(symbols)
            merged = merge_quotes(self._holdings, quotes)
        except (httpx.HTTPError, ValueError, TypeError) as exc:
            self._settle(seq)
            logger.warning("Quote refresh #%d failed: %s", seq, exc)
            if not self._stopped and seq > self._applied_sequence:
                self.error = STALE_DATA_MESSAGE
                self._notify()
            return False

        self._settle(seq)
        if self._stopped:
            logger.debug("Dropping refresh #%d: cycle stopped", seq)
            return False
        if seq < self._applied_sequence:
            logger.debug("Dropping refresh #%d: #%d already applied", seq, self._applied_sequence)
            return False

        self._holdings = merged
        self._snapshot = aggregate(self._holdings)
        self._applied_sequence = seq
        self.error = None
        logger.info(
            "Refresh #%d merged %d quotes | value=%.2f pnl=%.2f",
            seq,
            len(quotes),
            self._snapshot.total_present_value,
            self._snapshot.total_gain_loss,
        )
        self._notify()
        return True

    def _settle(self, seq: int) -> None:
        # only the newest refresh clears the flag
        if seq == self._sequence:
            self.loading = False

    def _notify(self) -> None:
        if self._on_update is not None:
            self._on_update(self._snapshot, self.error, self.loading)

    def start(self) -> None:
        """
        Schedule refreshes: one now, then every interval.
        Must be called from within a running event loop.
        """
        if self.running:
            return
        self._stopped = False
        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            self.refresh_once,
            trigger=IntervalTrigger(seconds=self._interval_seconds),
            id=REFRESH_JOB_ID,
            next_run_time=datetime.now(),
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
        scheduler.start()
        self._scheduler = scheduler
        logger.info("Refresh cycle started (every %.0fs)", self._interval_seconds)

    async def stop(self) -> None:
        self._stopped = True
        if self._scheduler is not None:
            if self._scheduler.running:
                self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Refresh cycle stopped")
