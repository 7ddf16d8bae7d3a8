"""
Application Settings
Load from environment variables
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment"""

    # ======================
    # Application
    # ======================
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    API_HOST: str = "0.0.0.0"
    PORT: int = 4010

    # ======================
    # CORS
    # ======================
    DEV_FRONTEND_URL: str = "http://localhost:4000"
    FRONTEND_URL: Optional[str] = None
    CORS_ORIGIN_REGEX: str = r"https://.*\.vercel\.app"

    # ======================
    # Market Data
    # ======================
    DEFAULT_EXCHANGE_SUFFIX: str = ".NS"
    QUOTE_CACHE_TTL_SECONDS: float = 10.0
    QUOTE_TIMEOUT_SECONDS: float = 5.0
    BATCH_SIZE: int = 5
    BATCH_PAUSE_SECONDS: float = 0.5

    # ======================
    # Dashboard client
    # ======================
    API_BASE_URL: str = "http://localhost:4010"
    API_TIMEOUT_SECONDS: float = 10.0
    REFRESH_INTERVAL_SECONDS: float = 15.0
    PORTFOLIO_FILE: str = "config/portfolio.yaml"

    # ======================
    # Pydantic v2 config
    # ======================
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        origins = [self.DEV_FRONTEND_URL, self.FRONTEND_URL]
        return [origin for origin in origins if origin]


settings = Settings()
