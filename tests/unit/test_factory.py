import pytest
from pagefetch.core import config
from pagefetch.fetch.base import BaseFetcher, FetchResult
from pagefetch.fetch.errors import ConfigurationError
from pagefetch.fetch.factory import fetcher_class, get_content_fetcher
from pagefetch.fetch.null_fetcher import NullFetcher
from pagefetch.fetch.web_fetcher import WebFetcher


class TestFetcherFactory:
    """Fetcher selection from configuration"""

    def test_default_is_web(self):
        assert fetcher_class() is WebFetcher

    def test_configured_null(self):
        config.settings.CONTENT_FETCHER = "null"
        assert isinstance(get_content_fetcher(), NullFetcher)

    def test_options_reach_web_fetcher(self):
        fetcher = get_content_fetcher("web", timeout=3, user_agent="ua/1")
        assert fetcher.timeout == 3
        assert fetcher.user_agent == "ua/1"

    def test_custom_class(self):
        class StaticFetcher(BaseFetcher):
            def fetch(self, url):
                return FetchResult(content="static")

        assert isinstance(get_content_fetcher(StaticFetcher), StaticFetcher)

    @pytest.mark.parametrize("name", ["ftp", "", dict])
    def test_unknown(self, name):
        with pytest.raises(ConfigurationError):
            fetcher_class(name)


class TestNullFetcher:

    def test_returns_nothing_without_network(self, fake_dns, fake_http):
        result = NullFetcher().fetch("example.com")
        assert result.content is None
        assert result.trace.url == "https://example.com"
        assert result.trace.status is None
        assert fake_dns.lookups == []
        assert fake_http.calls == []

    def test_base_fetcher_is_abstract(self):
        with pytest.raises(NotImplementedError):
            BaseFetcher().fetch("https://example.com")
