import os

VERSION = "1.0.0"

class Settings:
    # Web fetching
    WEB_FETCH_TIMEOUT: float = float(os.getenv("WEB_FETCH_TIMEOUT", "10"))
    WEB_FETCH_USER_AGENT: str = os.getenv("WEB_FETCH_USER_AGENT", f"pagefetch/{VERSION}")
    WEB_FETCH_MAX_BYTES: int = int(os.getenv("WEB_FETCH_MAX_BYTES", str(5 * 1024 * 1024)))

    # Which content fetcher to use: "web" or "null"
    CONTENT_FETCHER: str = os.getenv("CONTENT_FETCHER", "web").lower()

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

settings = Settings()
