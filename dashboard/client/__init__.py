from .api_client import QuotesApiClient
from .refresh_cycle import RefreshCycle, STALE_DATA_MESSAGE

__all__ = ["QuotesApiClient", "RefreshCycle", "STALE_DATA_MESSAGE"]
