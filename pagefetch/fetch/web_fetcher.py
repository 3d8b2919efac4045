import logging
from typing import Optional, Tuple

import requests
from requests.adapters import HTTPAdapter

from .base import BaseFetcher, FetchRequest, FetchResult, FetchTrace, RedirectState
from .errors import FetchError, InvalidUrlError, RedirectExhaustedError, TransportError
from .extractor import extract_text_content
from .guard import PinnedTarget, pin_target
from .utils import normalize_url, resolve_redirect_url

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 16 * 1024
_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class PinnedHostAdapter(HTTPAdapter):
    """
    Transport adapter for requests whose URL host is an already validated IP.

    The connection goes to the IP in the URL; TLS uses the original host name
    for SNI and certificate matching.
    """

    def __init__(self, hostname: str, **kwargs):
        self.hostname = hostname
        super().__init__(**kwargs)

    def build_connection_pool_key_attributes(self, request, verify, cert=None):
        host_params, pool_kwargs = super().build_connection_pool_key_attributes(request, verify, cert)
        if host_params["scheme"] == "https":
            pool_kwargs["server_hostname"] = self.hostname
            pool_kwargs["assert_hostname"] = self.hostname
        return host_params, pool_kwargs


def pinned_session(target: PinnedTarget) -> requests.Session:
    session = requests.Session()
    # Ambient proxies and netrc credentials never apply to pinned requests
    session.trust_env = False
    adapter = PinnedHostAdapter(target.hostname, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


class WebFetcher(BaseFetcher):
    """
    Fetches a page from an untrusted URL and returns its plain text.

    Every hop is resolved, checked against the private address table and then
    connected to by IP. At most three redirects are followed. Failures never
    raise: they come back as content=None with the reason in the trace.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self.max_bytes = max_bytes

    def fetch(self, url: Optional[str]) -> FetchResult:
        trace = FetchTrace()

        normalized = normalize_url(url)
        if normalized is None:
            trace.record_error("URL is empty")
            return FetchResult(content=None, trace=trace)
        trace.url = normalized

        request = FetchRequest.build(
            normalized,
            timeout=self.timeout,
            user_agent=self.user_agent,
            max_bytes=self.max_bytes,
        )

        try:
            body, charset = self._fetch_with_redirects(request)
            if not body:
                trace.record_empty_response()
                return FetchResult(content=None, trace=trace)
            content = extract_text_content(body, encoding=charset)
        except ImportError:
            raise
        except (FetchError, requests.RequestException, UnicodeError) as e:
            logger.warning("Fetch of %s failed: %s", normalized, e)
            trace.record_error(str(e))
            return FetchResult(content=None, trace=trace)
        except Exception as e:
            # Programming error, not a network condition: logged with traceback
            logger.exception("Unexpected error while fetching %s", normalized)
            trace.record_error(f"Internal error: {type(e).__name__}: {e}")
            return FetchResult(content=None, trace=trace)

        trace.record_success(content)
        return FetchResult(content=content, trace=trace)

    def _fetch_with_redirects(self, request: FetchRequest) -> Tuple[bytes, Optional[str]]:
        state = RedirectState(current_url=request.url)

        while True:
            target = pin_target(state.current_url)
            with pinned_session(target) as session:
                response = self._send(session, target, request)
                with response:
                    status = response.status_code
                    if 200 <= status < 300:
                        return self._read_body(response, request.max_bytes), _declared_charset(response)

                    if not 300 <= status < 400:
                        raise TransportError(f"HTTP {status} for {state.current_url}")

                    location = response.headers.get("Location")

            next_url = resolve_redirect_url(state.current_url, location)
            if next_url is None:
                raise InvalidUrlError(
                    f"HTTP {status} from {state.current_url} has no usable Location ({location!r})"
                )
            if state.hops_remaining == 0:
                raise RedirectExhaustedError(
                    f"Too many redirects: gave up at {state.current_url} -> {next_url}"
                )
            logger.debug("Redirect %s -> %s (%d hops left)", state.current_url, next_url, state.hops_remaining)
            state.current_url = next_url
            state.hops_remaining -= 1

    def _send(self, session: requests.Session, target: PinnedTarget, request: FetchRequest) -> requests.Response:
        headers = {
            "Host": target.host_header,
            "User-Agent": request.user_agent,
            "Accept": _ACCEPT,
        }
        try:
            return session.get(
                target.request_url,
                headers=headers,
                timeout=(request.timeout, request.timeout),
                allow_redirects=False,
                stream=True,
            )
        except requests.RequestException as e:
            raise TransportError(f"Request to {target.url} failed: {e}") from e

    def _read_body(self, response: requests.Response, max_bytes: int) -> bytes:
        chunks = []
        received = 0
        try:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                chunks.append(chunk)
                received += len(chunk)
                if received >= max_bytes:
                    logger.debug("Response body reached %d bytes, ignoring the rest", max_bytes)
                    break
        except requests.RequestException as e:
            raise TransportError(f"Reading response from {response.url} failed: {e}") from e
        return b"".join(chunks)[:max_bytes]


def _declared_charset(response: requests.Response) -> Optional[str]:
    """Charset from the Content-Type header, or None when the header has none."""
    content_type = response.headers.get("Content-Type", "")
    if "charset" not in content_type.lower():
        return None
    return requests.utils.get_encoding_from_headers(response.headers)
