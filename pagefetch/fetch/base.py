from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pagefetch.core.config import settings

MAX_REDIRECTS = 3
PREVIEW_LENGTH = 500


class FetchStatus(str, Enum):
    SUCCESS = "success"
    FAILED_EMPTY_RESPONSE = "failed_empty_response"
    ERROR = "error"


@dataclass(frozen=True)
class FetchRequest:
    url: str
    timeout: float
    user_agent: str
    max_bytes: int

    @classmethod
    def build(
        cls,
        url: str,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        max_bytes: Optional[int] = None,
    ) -> "FetchRequest":
        """Fill unset options from the process-wide settings."""
        return cls(
            url=url,
            timeout=timeout if timeout is not None else settings.WEB_FETCH_TIMEOUT,
            user_agent=user_agent or settings.WEB_FETCH_USER_AGENT,
            max_bytes=max_bytes if max_bytes is not None else settings.WEB_FETCH_MAX_BYTES,
        )


@dataclass
class RedirectState:
    current_url: str
    hops_remaining: int = MAX_REDIRECTS


@dataclass
class FetchTrace:
    """
    Diagnostic record of a single fetch call.

    Created fresh by every fetch and never shared between calls. The trace
    only describes what happened; nothing reads it to make decisions.
    """
    url: str = ""
    status: Optional[FetchStatus] = None
    content_length: Optional[int] = None
    content_preview: Optional[str] = None
    error_detail: Optional[str] = None

    def record_success(self, content: Optional[str]) -> None:
        content = content or ""
        self.status = FetchStatus.SUCCESS
        self.content_length = len(content)
        self.content_preview = content[:PREVIEW_LENGTH]

    def record_empty_response(self) -> None:
        self.status = FetchStatus.FAILED_EMPTY_RESPONSE

    def record_error(self, detail: str) -> None:
        self.status = FetchStatus.ERROR
        self.error_detail = detail

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "status": self.status.value if self.status else None,
            "content_length": self.content_length,
            "content_preview": self.content_preview,
            "error_detail": self.error_detail,
        }


@dataclass
class FetchResult:
    content: Optional[str]
    trace: FetchTrace = field(default_factory=FetchTrace)


class BaseFetcher:
    def fetch(self, url: Optional[str]) -> FetchResult:
        raise NotImplementedError
