import re
from typing import Optional, Union

from pagefetch.fetch.utils import truncate_text

MAX_CONTENT_LENGTH = 2000
REMOVED_TAGS = ["script", "style", "nav", "footer", "header"]


def _beautiful_soup():
    try:
        from bs4 import BeautifulSoup  # lazy import; a missing parser is reported at call time
    except Exception as e:
        raise ImportError("beautifulsoup4 package is required for web content extraction") from e
    return BeautifulSoup


def extract_text_content(
    html: Union[str, bytes, None],
    max_length: int = MAX_CONTENT_LENGTH,
    encoding: Optional[str] = None,
) -> Optional[str]:
    """
    Extract readable body text from an HTML page.
    Raw bytes are decoded with encoding when given, otherwise bs4 reads the
    <meta charset> or guesses.
    Drops script/style/nav/footer/header subtrees, collapses whitespace and
    truncates to max_length characters with a '...' marker.
    Returns None for empty input; an empty string means the page had no text.
    """
    if not html:
        return None

    if isinstance(html, bytes):
        soup = _beautiful_soup()(html, "html.parser", from_encoding=encoding)
    else:
        soup = _beautiful_soup()(html, "html.parser")
    for element in soup(REMOVED_TAGS):
        element.decompose()

    root = soup.body if soup.body is not None else soup
    text = root.get_text(" ")
    text = re.sub(r"\s+", " ", text).strip()
    return truncate_text(text, max_length)
