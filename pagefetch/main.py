import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from pagefetch.api.routes import router
from pagefetch.core.config import settings, VERSION

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Configure logging on startup.
    """
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Page Fetcher (fetcher=%s, timeout=%ss)", settings.CONTENT_FETCHER, settings.WEB_FETCH_TIMEOUT)

    yield

    logger.info("Shutting down Page Fetcher")

app = FastAPI(
    title="Page Fetcher",
    description="API for fetching plain-text content of public web pages with SSRF protection",
    version=VERSION,
    lifespan=lifespan
)

# Include API routes
app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "Page Fetcher",
        "version": VERSION,
        "endpoints": {
            "fetch": "POST /fetch",
            "health": "GET /health"
        }
    }
