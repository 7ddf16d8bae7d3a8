import threading
from typing import AsyncGenerator, Callable, Dict, List, Optional, Union

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from dashboard.api.routes import health, stocks
from dashboard.domain.models import Holding, UpstreamQuote
from dashboard.infrastructure.market_data.quote_cache import QuoteCache
from dashboard.services.batch_quote_service import BatchQuoteService
from dashboard.services.quote_fetcher import QuoteFetcher


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubQuoteSource:
    """
    Quote source returning canned prices keyed by provider symbol.
    A value that is an exception instance is raised instead.
    """

    def __init__(self, quotes: Optional[Dict[str, Union[UpstreamQuote, Exception]]] = None):
        self.quotes = quotes or {}
        self.calls: List[str] = []
        self._lock = threading.Lock()

    def quote(self, symbol: str) -> UpstreamQuote:
        with self._lock:
            self.calls.append(symbol)
        value = self.quotes.get(symbol)
        if value is None:
            raise LookupError(f"Quote not found for symbol: {symbol}")
        if isinstance(value, Exception):
            raise value
        return value


async def no_sleep(seconds: float) -> None:
    return None


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def quote_source() -> StubQuoteSource:
    return StubQuoteSource(
        {
            "HDFCBANK.NS": UpstreamQuote(regular_market_price=1650.5),
            "TCS.NS": UpstreamQuote(regular_market_price=3900.0),
            "KPIGREEN.BO": UpstreamQuote(price=910.0),
        }
    )


@pytest.fixture()
def fetcher(quote_source, clock) -> QuoteFetcher:
    return QuoteFetcher(quote_source, QuoteCache(ttl_seconds=10.0, clock=clock))


@pytest.fixture()
def batch_service(fetcher) -> BatchQuoteService:
    return BatchQuoteService(fetcher, batch_size=5, pause_seconds=0.5, sleep=no_sleep)


@pytest.fixture()
def make_holding() -> Callable[..., Holding]:
    def _make(
        symbol: str = "HDFCBANK",
        sector: str = "Financial Sector",
        purchase_price: float = 100.0,
        qty: int = 10,
        cmp: Optional[float] = None,
        no: int = 1,
        **overrides,
    ) -> Holding:
        cmp = purchase_price if cmp is None else cmp
        fields = dict(
            no=no,
            name=symbol.title(),
            sector=sector,
            purchase_price=purchase_price,
            qty=qty,
            investment=purchase_price * qty,
            symbol=symbol,
            cmp=cmp,
            present_value=cmp * qty,
        )
        fields.update(overrides)
        return Holding(**fields)

    return _make


@pytest.fixture()
async def app(batch_service) -> FastAPI:
    app = FastAPI()
    app.include_router(health.router, tags=["Health"])
    app.include_router(stocks.router, prefix="/api/stocks", tags=["Stocks"])
    app.state.batch_quote_service = batch_service
    return app


@pytest.fixture()
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
