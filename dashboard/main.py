"""
FastAPI Main Application
Quote proxy for the portfolio dashboard
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from typing import AsyncGenerator
import logging

from dashboard.config import settings
from dashboard.core.logging import setup_logging
from dashboard.infrastructure.market_data.quote_cache import QuoteCache
from dashboard.infrastructure.market_data.yfinance_provider import YFinanceQuoteSource
from dashboard.services.batch_quote_service import BatchQuoteService
from dashboard.services.quote_fetcher import QuoteFetcher
from dashboard.api.routes import health, stocks

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


def build_batch_quote_service() -> BatchQuoteService:
    """Wire cache → fetcher → batch service from settings."""
    cache = QuoteCache(ttl_seconds=settings.QUOTE_CACHE_TTL_SECONDS)
    fetcher = QuoteFetcher(
        source=YFinanceQuoteSource(),
        cache=cache,
        default_suffix=settings.DEFAULT_EXCHANGE_SUFFIX,
        timeout_seconds=settings.QUOTE_TIMEOUT_SECONDS,
    )
    return BatchQuoteService(
        fetcher,
        batch_size=settings.BATCH_SIZE,
        pause_seconds=settings.BATCH_PAUSE_SECONDS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager
    Creates the quote service once; cache entries expire on their own.
    """
    logger.info("Starting portfolio dashboard API")
    app.state.batch_quote_service = build_batch_quote_service()
    logger.info(
        "Quote service ready | ttl=%.1fs batch_size=%d pause=%.2fs timeout=%.1fs",
        settings.QUOTE_CACHE_TTL_SECONDS,
        settings.BATCH_SIZE,
        settings.BATCH_PAUSE_SECONDS,
        settings.QUOTE_TIMEOUT_SECONDS,
    )
    logger.info("CORS origins: %s (+ %s)", settings.cors_origins, settings.CORS_ORIGIN_REGEX)

    yield

    logger.info("Portfolio dashboard API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Portfolio Dashboard API",
    description="Batched near-real-time quotes for the portfolio dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

# Requests without an Origin header are not subject to CORS checks
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=settings.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["Health"])
app.include_router(stocks.router, prefix="/api/stocks", tags=["Stocks"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("dashboard.main:app", host=settings.API_HOST, port=settings.PORT, reload=settings.DEBUG)
