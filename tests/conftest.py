import socket
import pytest
import requests
from pagefetch.core import config


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Keep settings overrides from leaking between tests"""
    # Store original values
    original = {
        name: getattr(config.settings, name)
        for name in ("WEB_FETCH_TIMEOUT", "WEB_FETCH_USER_AGENT", "WEB_FETCH_MAX_BYTES", "CONTENT_FETCHER")
    }
    config.settings.CONTENT_FETCHER = "web"

    yield

    # Restore original values
    for name, value in original.items():
        setattr(config.settings, name, value)


class FakeDNS:
    """Stand-in for socket.getaddrinfo backed by a host -> [ip, ...] table"""

    def __init__(self):
        self.records = {}
        self.lookups = []

    def getaddrinfo(self, host, port, family=0, type=0, proto=0, flags=0):
        self.lookups.append(host)
        if host not in self.records:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        infos = []
        for ip in self.records[host]:
            if ":" in ip:
                infos.append((socket.AF_INET6, socket.SOCK_STREAM, 6, "", (ip, port, 0, 0)))
            else:
                infos.append((socket.AF_INET, socket.SOCK_STREAM, 6, "", (ip, port)))
        return infos


class FakeHTTP:
    """Stand-in for requests.Session.get serving canned responses by URL"""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"Connection refused: {url}")
        if isinstance(route, Exception):
            raise route
        return route


def build_response(status=200, body=b"", headers=None):
    """Build a requests.Response whose body is already in memory"""
    response = requests.Response()
    response.status_code = status
    response._content = body
    response._content_consumed = True
    response.headers.update(headers or {})
    return response


@pytest.fixture
def fake_dns(monkeypatch):
    dns = FakeDNS()
    monkeypatch.setattr(socket, "getaddrinfo", dns.getaddrinfo)
    return dns


@pytest.fixture
def fake_http(monkeypatch):
    http = FakeHTTP()

    def fake_get(session, url, **kwargs):
        return http.get(url, **kwargs)

    monkeypatch.setattr(requests.Session, "get", fake_get)
    return http


@pytest.fixture
def make_response():
    return build_response
