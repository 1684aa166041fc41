"""
SSRF guard for outbound page fetches.

``validate_url`` is a pure check on the URL text: it never touches the
network. It only range-checks literal dotted-quad IPv4 hostnames, so a name
that resolves to a private address passes it. ``validate_resolved_host``
closes that gap when DNS hardening is enabled in ``core.config``.
"""

import ipaddress
import re
import socket
from urllib.parse import urlsplit

from loguru import logger

from utils.error_utils import FetchError, URLValidationError


ALLOWED_SCHEMES = ("http", "https")
BLOCKED_HOSTS = ("localhost", "0.0.0.0")
BLOCKED_SUFFIXES = (".local", ".internal", ".localhost")

_IPV4_RE = re.compile(r"^(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})$")


def _check_private_ipv4(hostname: str) -> None:
    match = _IPV4_RE.match(hostname)
    if not match:
        return

    first, second = int(match.group(1)), int(match.group(2))

    if first == 10:
        raise URLValidationError("Access to private IP range 10.0.0.0/8 is not allowed")
    if first == 172 and 16 <= second <= 31:
        raise URLValidationError("Access to private IP range 172.16.0.0/12 is not allowed")
    if first == 192 and second == 168:
        raise URLValidationError("Access to private IP range 192.168.0.0/16 is not allowed")
    # AWS / GCP / Azure metadata endpoints live here
    if first == 169 and second == 254:
        raise URLValidationError("Access to cloud metadata endpoint is not allowed")


def validate_url(url: str) -> None:
    """Raise URLValidationError if ``url`` could reach an internal resource."""
    if not isinstance(url, str) or not url.strip():
        raise URLValidationError("Invalid URL format")

    try:
        parsed = urlsplit(url.strip())
        hostname = parsed.hostname
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        raise URLValidationError("Invalid URL format") from None

    if not parsed.scheme:
        raise URLValidationError("Invalid URL format")

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise URLValidationError("Only HTTP and HTTPS protocols are allowed")

    if not hostname:
        raise URLValidationError("Invalid URL format")

    hostname = hostname.lower()

    if hostname in BLOCKED_HOSTS:
        raise URLValidationError("Access to localhost is not allowed")

    if hostname == "127.0.0.1" or hostname.startswith("127."):
        raise URLValidationError("Access to loopback addresses is not allowed")

    _check_private_ipv4(hostname)

    if hostname in ("::1", "[::1]"):
        raise URLValidationError("Access to IPv6 localhost is not allowed")

    if hostname.endswith(BLOCKED_SUFFIXES):
        raise URLValidationError("Access to internal domains is not allowed")


def _is_forbidden_address(ip_text: str) -> bool:
    try:
        ip = ipaddress.ip_address(ip_text.split("%", 1)[0])
    except ValueError:
        return False
    return (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_multicast
        or ip.is_unspecified
    )


def validate_resolved_host(hostname: str) -> None:
    """
    Resolve ``hostname`` and reject it if any address is non-public.

    A failed lookup is a transient fetch problem, not a validation failure.
    """
    try:
        infos = socket.getaddrinfo(hostname, None)
    except socket.gaierror as exc:
        raise FetchError(f"DNS resolution failed for {hostname}: {exc}") from exc

    for _, _, _, _, sockaddr in infos:
        ip_text = sockaddr[0]
        if _is_forbidden_address(ip_text):
            logger.warning("Host {} resolves to non-public address {}", hostname, ip_text)
            raise URLValidationError(
                f"Host {hostname} resolves to a private or reserved address ({ip_text})"
            )
