from typing import Optional, Type, Union

from pagefetch.core.config import settings

from .base import BaseFetcher
from .errors import ConfigurationError
from .null_fetcher import NullFetcher
from .web_fetcher import WebFetcher


def fetcher_class(name: Union[str, Type[BaseFetcher], None] = None) -> Type[BaseFetcher]:
    """Map a configured fetcher name ("web", "null") or a BaseFetcher subclass to a class."""
    name = name if name is not None else settings.CONTENT_FETCHER
    if isinstance(name, type):
        if issubclass(name, BaseFetcher):
            return name
        raise ConfigurationError(f"Not a content fetcher: {name!r}")
    if name == "web":
        return WebFetcher
    if name == "null":
        return NullFetcher
    raise ConfigurationError(f"Unknown content fetcher: {name!r}")


def get_content_fetcher(
    name: Union[str, Type[BaseFetcher], None] = None,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
) -> BaseFetcher:
    cls = fetcher_class(name)
    if issubclass(cls, WebFetcher):
        return cls(timeout=timeout, user_agent=user_agent)
    return cls()
