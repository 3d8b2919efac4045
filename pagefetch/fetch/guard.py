"""
Host resolution and SSRF guard.

The guard resolves a URL's host once and hands back the exact address the
connection must be made to. Callers connect to that address and send the
original host name only in the Host header and TLS SNI, so a second DNS
answer can never swap in an internal address after validation.
"""

import logging
import socket
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlsplit, urlunsplit

from pagefetch.fetch.addresses import is_public_address, parse_address
from pagefetch.fetch.errors import (
    AddressBlockedError,
    InvalidUrlError,
    ResolutionError,
    UnsupportedSchemeError,
)

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class ResolvedAddress:
    ip: str
    is_public: bool


@dataclass(frozen=True)
class PinnedTarget:
    url: str
    scheme: str
    hostname: str
    port: Optional[int]
    path: str
    query: str
    address: ResolvedAddress

    @property
    def request_url(self) -> str:
        """The URL with its host replaced by the selected IP literal."""
        ip = self.address.ip
        host = f"[{ip}]" if ":" in ip else ip
        if self.port is not None:
            host = f"{host}:{self.port}"
        return urlunsplit((self.scheme, host, self.path or "/", self.query, ""))

    @property
    def host_header(self) -> str:
        host = f"[{self.hostname}]" if ":" in self.hostname else self.hostname
        if self.port is not None and self.port != DEFAULT_PORTS[self.scheme]:
            return f"{host}:{self.port}"
        return host


def resolve_addresses(hostname: str, port: int) -> List[ResolvedAddress]:
    """Ask the system resolver for every address of hostname, in resolver order."""
    try:
        infos = socket.getaddrinfo(hostname, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
    except (OSError, UnicodeError) as e:
        raise ResolutionError(f"DNS resolution failed for {hostname}: {e}") from e

    addresses: List[ResolvedAddress] = []
    seen = set()
    for _family, _type, _proto, _canonname, sockaddr in infos:
        ip = str(sockaddr[0])
        if ip in seen:
            continue
        seen.add(ip)
        addresses.append(ResolvedAddress(ip=ip, is_public=is_public_address(ip)))
    return addresses


def select_public_address(hostname: str, addresses: List[ResolvedAddress]) -> ResolvedAddress:
    if not addresses:
        raise ResolutionError(f"DNS resolution returned no addresses for {hostname}")
    for address in addresses:
        if address.is_public:
            return address
    blocked = ", ".join(a.ip for a in addresses)
    raise AddressBlockedError(f"{hostname} resolves only to private addresses ({blocked})")


def pin_target(url: str) -> PinnedTarget:
    """
    Validate url and bind it to one public address.

    Raises InvalidUrlError, UnsupportedSchemeError, ResolutionError or
    AddressBlockedError. No network traffic other than the DNS lookup happens
    here.
    """
    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError as e:
        raise InvalidUrlError(f"Invalid URL {url!r}: {e}") from e

    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise UnsupportedSchemeError(f"Unsupported URL scheme: {parts.scheme!r}")

    if not parts.hostname:
        raise InvalidUrlError(f"URL has no host: {url!r}")

    hostname = _ascii_hostname(parts.hostname)
    addresses = resolve_addresses(hostname, port or DEFAULT_PORTS[scheme])
    address = select_public_address(hostname, addresses)
    logger.debug("Pinned %s to %s", hostname, address.ip)

    return PinnedTarget(
        url=url,
        scheme=scheme,
        hostname=hostname,
        port=port,
        path=parts.path,
        query=parts.query,
        address=address,
    )


def _ascii_hostname(hostname: str) -> str:
    try:
        parse_address(hostname)
        return hostname
    except ValueError:
        pass
    try:
        return hostname.encode("idna").decode("ascii")
    except UnicodeError as e:
        raise InvalidUrlError(f"Invalid host name {hostname!r}: {e}") from e
