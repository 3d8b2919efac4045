"""
Classification of IP addresses into public (safe to connect to) and private.

The blocked table is fixed at import time and cannot be changed by callers.
Anything that does not parse as an IP address is treated as private.
"""

import ipaddress
from enum import Enum
from typing import Union

BLOCKED_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


class AddressClass(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    UNPARSEABLE = "unparseable"


def parse_address(address: str) -> IPAddress:
    """Parse an address string, dropping an IPv6 zone id (fe80::1%eth0)."""
    text = str(address).strip().strip("[]")
    if "%" in text:
        text = text.split("%", 1)[0]
    return ipaddress.ip_address(text)


def classify_address(address: str) -> AddressClass:
    try:
        ip = parse_address(address)
    except ValueError:
        return AddressClass.UNPARSEABLE

    # ::ffff:127.0.0.1 reaches the same host as 127.0.0.1
    if ip.version == 6 and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    # Neither is a valid destination for an outbound connection
    if ip.is_unspecified or ip.is_multicast:
        return AddressClass.PRIVATE

    for network in BLOCKED_NETWORKS:
        if ip.version == network.version and ip in network:
            return AddressClass.PRIVATE
    return AddressClass.PUBLIC


def is_public_address(address: str) -> bool:
    return classify_address(address) is AddressClass.PUBLIC
