from typing import Optional

from .base import BaseFetcher, FetchResult, FetchTrace
from .utils import normalize_url


class NullFetcher(BaseFetcher):
    """Fetcher used when content acquisition is switched off. Never touches the network."""

    def fetch(self, url: Optional[str]) -> FetchResult:
        return FetchResult(content=None, trace=FetchTrace(url=normalize_url(url) or ""))
