import logging
from typing import Optional

from pagefetch.fetch.base import FetchResult
from pagefetch.fetch.factory import get_content_fetcher

logger = logging.getLogger(__name__)


def acquire_content(
    url: Optional[str],
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
) -> FetchResult:
    """
    Fetch a page's text for downstream use (e.g. a classification prompt).
    Uses the fetcher selected by CONTENT_FETCHER and never raises for
    network or input problems; look at result.trace for the reason.
    """
    fetcher = get_content_fetcher(timeout=timeout, user_agent=user_agent)
    result = fetcher.fetch(url)

    trace = result.trace
    status = trace.status.value if trace.status else "skipped"
    if result.content is not None:
        logger.info("Acquired %d chars from %s", trace.content_length, trace.url)
    else:
        logger.info("No content from %r (status=%s, detail=%s)", trace.url or url, status, trace.error_detail)
    return result
