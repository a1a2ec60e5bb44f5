"""URL validation run before any network access.

Rejects non-HTTP(S) schemes, literal local host names, and host names
whose DNS answer points into loopback, private or link-local ranges.

This is a best-effort SSRF guard: the address is resolved once here and
again by the HTTP client, so DNS rebinding between the two lookups is not
prevented.
"""

import ipaddress
import logging
import socket
from typing import Callable
from urllib.parse import urlparse

from errors import BlockedHostError, InvalidSchemeError

logger = logging.getLogger(__name__)

Resolver = Callable[[str], str]

ALLOWED_SCHEMES = {"http", "https"}
# urlparse strips the brackets from IPv6 literals, so "[::]" arrives as "::".
BLOCKED_HOSTNAMES = {"localhost", "0.0.0.0", "::", "[::]"}
BLOCKED_NETWORKS = [
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),
    ipaddress.ip_network("fe80::/10"),
]


def resolve_host(hostname: str) -> str:
    """Return the first address the system resolver gives for `hostname`."""
    infos = socket.getaddrinfo(hostname, None, proto=socket.IPPROTO_TCP)
    if not infos:
        raise socket.gaierror(f"No address found for {hostname}")
    return str(infos[0][4][0])


def is_blocked_address(address: str) -> bool:
    """True if `address` falls in a loopback, private or link-local range."""
    try:
        ip = ipaddress.ip_address(address.split("%", 1)[0])
    except ValueError:
        return False

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    return any(ip.version == net.version and ip in net for net in BLOCKED_NETWORKS)


def validate_url(url: str, resolver: Resolver = resolve_host) -> str:
    """
    Check `url` against the scheme and host rules and return it unchanged.

    Raises InvalidSchemeError or BlockedHostError. DNS failures are not
    validation failures: they are left for the fetch step to report.
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidSchemeError(f"Invalid URL: {exc}") from exc

    if (parsed.scheme or "").lower() not in ALLOWED_SCHEMES:
        raise InvalidSchemeError()

    if not hostname:
        raise InvalidSchemeError("Invalid URL: a host name is required")

    hostname = hostname.lower()
    if hostname in BLOCKED_HOSTNAMES:
        logger.info("Blocked literal local host %s", hostname)
        raise BlockedHostError()

    try:
        address = resolver(hostname)
    except (OSError, UnicodeError, ValueError) as exc:
        logger.debug("DNS lookup for %s failed, deferring to fetch: %s", hostname, exc)
        return url

    logger.debug("Resolved %s to %s", hostname, address)
    if is_blocked_address(address):
        logger.info("Blocked %s resolving to private address %s", hostname, address)
        raise BlockedHostError("Private and local IP addresses are not allowed")

    return url
