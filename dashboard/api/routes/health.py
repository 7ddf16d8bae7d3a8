from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
def health(request: Request):
    service = getattr(request.app.state, "batch_quote_service", None)
    cached = len(service.fetcher.cache) if service is not None else 0
    return {
        "status": "ok",
        "quote_service": "ready" if service is not None else "not_initialized",
        "cached_symbols": cached,
    }
