"""
Terminal dashboard: polls the quote proxy and prints the portfolio.

    python -m dashboard.client --base-url http://localhost:4010
"""

import argparse
import asyncio
import logging

from dashboard.client.api_client import QuotesApiClient
from dashboard.client.refresh_cycle import RefreshCycle
from dashboard.client.view import render_portfolio
from dashboard.config import settings
from dashboard.core.logging import setup_logging
from dashboard.domain.services.seed_loader import load_holdings

logger = logging.getLogger(__name__)


def _print_snapshot(snapshot, error, loading):
    print(render_portfolio(snapshot, error=error, loading=loading), flush=True)
    print(flush=True)


async def run(base_url: str, interval: float, portfolio_file: str, once: bool) -> None:
    holdings = load_holdings(portfolio_file)

    async with QuotesApiClient(base_url, timeout_seconds=settings.API_TIMEOUT_SECONDS) as client:
        cycle = RefreshCycle(
            holdings,
            client,
            interval_seconds=interval,
            on_update=_print_snapshot,
        )
        if once:
            await cycle.refresh_once()
            return

        cycle.start()
        try:
            await asyncio.Event().wait()
        finally:
            await cycle.stop()


def main():
    parser = argparse.ArgumentParser(description="Portfolio dashboard (terminal view)")
    parser.add_argument("--base-url", default=settings.API_BASE_URL, help="Quote API base URL")
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.REFRESH_INTERVAL_SECONDS,
        help="Seconds between refreshes",
    )
    parser.add_argument("--portfolio", default=settings.PORTFOLIO_FILE, help="Seed holdings YAML")
    parser.add_argument("--once", action="store_true", help="Refresh once and exit")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL)
    try:
        asyncio.run(run(args.base_url, args.interval, args.portfolio, args.once))
    except KeyboardInterrupt:
        logger.info("Dashboard stopped")


if __name__ == "__main__":
    main()
