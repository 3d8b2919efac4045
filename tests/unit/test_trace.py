from pagefetch.fetch.base import FetchRequest, FetchStatus, FetchTrace, PREVIEW_LENGTH
from pagefetch.core import config


class TestFetchTrace:
    """Unit tests for the per-call diagnostic record"""

    def test_success_records_length_and_prefix_preview(self):
        content = "x" * 1200 + "..."
        trace = FetchTrace(url="https://example.com")
        trace.record_success(content)
        assert trace.status is FetchStatus.SUCCESS
        assert trace.content_length == len(content)
        assert len(trace.content_preview) == PREVIEW_LENGTH
        assert content.startswith(trace.content_preview)
        assert trace.error_detail is None

    def test_success_with_empty_text(self):
        trace = FetchTrace(url="https://example.com")
        trace.record_success("")
        assert trace.content_length == 0
        assert trace.content_preview == ""

    def test_error(self):
        trace = FetchTrace(url="https://example.com")
        trace.record_error("boom")
        assert trace.to_dict() == {
            "url": "https://example.com",
            "status": "error",
            "content_length": None,
            "content_preview": None,
            "error_detail": "boom",
        }

    def test_empty_response(self):
        trace = FetchTrace(url="https://example.com")
        trace.record_empty_response()
        assert trace.to_dict()["status"] == "failed_empty_response"

    def test_unset_status(self):
        assert FetchTrace().to_dict()["status"] is None


class TestFetchRequest:
    """Defaults come from settings"""

    def test_defaults_from_settings(self):
        config.settings.WEB_FETCH_TIMEOUT = 7.5
        config.settings.WEB_FETCH_USER_AGENT = "test-agent/1"
        request = FetchRequest.build("https://example.com")
        assert request.timeout == 7.5
        assert request.user_agent == "test-agent/1"
        assert request.max_bytes == config.settings.WEB_FETCH_MAX_BYTES

    def test_overrides(self):
        request = FetchRequest.build("https://example.com", timeout=2, user_agent="ua", max_bytes=10)
        assert (request.timeout, request.user_agent, request.max_bytes) == (2, "ua", 10)
