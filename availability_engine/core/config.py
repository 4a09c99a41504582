# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Core configuration - all env-driven, zero hardcode.
Single source of truth for every tunable parameter.
"""

import os


class Settings:
    """Engine settings loaded from environment variables."""

    SERVICE_NAME: str = os.getenv("SERVICE_NAME", "availability-engine")
    SERVICE_VERSION: str = os.getenv("SERVICE_VERSION", "1.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Roster cache
    ROSTER_MAX_AGE_SECONDS: float = float(os.getenv("ROSTER_MAX_AGE_SECONDS", "300"))
    ROSTER_FETCH_RETRIES: int = int(os.getenv("ROSTER_FETCH_RETRIES", "3"))
    RETRY_BACKOFF_BASE: float = float(os.getenv("RETRY_BACKOFF_BASE", "1.0"))
    ROSTER_FETCH_TIMEOUT: float = float(os.getenv("ROSTER_FETCH_TIMEOUT", "0"))

    # Queries
    DEFAULT_MAX_RESULTS: int = int(os.getenv("DEFAULT_MAX_RESULTS", "10"))
    NEXT_WINDOW_HORIZON_DAYS: int = int(os.getenv("NEXT_WINDOW_HORIZON_DAYS", "7"))

    # Upstream roster store
    ROSTER_SERVICE_URL: str = os.getenv("ROSTER_SERVICE_URL", "")
    ROSTER_HTTP_TIMEOUT: float = float(os.getenv("ROSTER_HTTP_TIMEOUT", "3.0"))


settings = Settings()
