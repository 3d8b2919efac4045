import re
from typing import Optional
from urllib.parse import urljoin, urlsplit

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)

TRUNCATION_MARKER = "..."


def normalize_url(raw: Optional[str]) -> Optional[str]:
    """
    Turn a loosely written URL into an absolute one.
    Examples: 'example.com' -> 'https://example.com', 'HTTP://a.b' -> 'HTTP://a.b'
    Blank input returns None.
    """
    if raw is None:
        return None
    url = raw.strip()
    if not url:
        return None
    if _SCHEME_RE.match(url):
        return url
    return f"https://{url}"


def resolve_redirect_url(base_url: str, location: Optional[str]) -> Optional[str]:
    """
    Resolve a Location header value against the URL that returned it.
    Examples (base 'https://a.example/page'):
        'https://b.example/' -> 'https://b.example/'
        '//b.example/x'      -> 'https://b.example/x'
        '/next'              -> 'https://a.example/next'
    Returns None when the target is blank or does not parse.
    """
    if location is None:
        return None
    target = location.strip()
    if not target:
        return None

    try:
        if _SCHEME_RE.match(target):
            urlsplit(target)
            return target
        if target.startswith("//"):
            scheme = urlsplit(base_url).scheme
            return f"{scheme}:{target}"
        return urljoin(base_url, target)
    except ValueError:
        return None


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to max_length characters and mark the cut with '...'."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_MARKER
