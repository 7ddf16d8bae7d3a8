"""
Stock quote routes.
"""

import logging
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from dashboard.services.batch_quote_service import BatchQuoteService

logger = logging.getLogger(__name__)
router = APIRouter()

INVALID_SYMBOLS_ERROR = "Symbols must be an array"
FETCH_FAILED_ERROR = "Failed to fetch stock data"


def get_batch_quote_service(request: Request) -> BatchQuoteService:
    return request.app.state.batch_quote_service


@router.post("/batch")
async def fetch_stock_batch(
    request: Request,
    service: BatchQuoteService = Depends(get_batch_quote_service),
):
    """
    Fetch quotes for a list of symbols.

    Returns one record per requested symbol; a symbol whose quote
    cannot be fetched comes back with price 0 and null fundamentals.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None

    symbols = payload.get("symbols") if isinstance(payload, dict) else None
    if not isinstance(symbols, list):
        return JSONResponse(status_code=400, content={"error": INVALID_SYMBOLS_ERROR})

    try:
        started = time.perf_counter()
        results = await service.fetch_batch(symbols)
        logger.info(
            "Fetched %d quotes in %.2fs", len(results), time.perf_counter() - started
        )
        # non-finite floats fail to render and take the 500 path
        return JSONResponse(content=[result.to_dict() for result in results])
    except Exception:
        logger.exception("Error in /api/stocks/batch")
        return JSONResponse(status_code=500, content={"error": FETCH_FAILED_ERROR})
