"""Websocket URL construction for the TV remote-control channel."""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import quote, urlsplit

from .config import TVConnectionConfiguration
from .errors import TVUrlConstructionFailed

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_HOST_DELIMITERS = frozenset("/?#@[]\\")

# base64 output must reach the TV byte for byte
_QUERY_SAFE = "+/="


def _format_host(host: str) -> str:
    if not host or any(ch.isspace() for ch in host):
        raise TVUrlConstructionFailed(f"Invalid host: {host!r}")
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        address = None
    if address is not None and address.version == 6:
        return f"[{host}]"
    if ":" in host or any(ch in _HOST_DELIMITERS for ch in host):
        raise TVUrlConstructionFailed(f"Invalid host: {host!r}")
    return host


def build_tv_url(config: TVConnectionConfiguration) -> str:
    """Compose ``scheme://host:port/path?name=...&token=...`` for a TV.

    ``name`` is always present and carries the base64 app name. ``token`` is
    only added when the configuration holds a non-empty token.

    Raises:
        TVUrlConstructionFailed: If the parts do not form a valid URI.
    """
    if not isinstance(config.scheme, str) or not _SCHEME_RE.match(config.scheme):
        raise TVUrlConstructionFailed(f"Invalid scheme: {config.scheme!r}")
    if (
        isinstance(config.port, bool)
        or not isinstance(config.port, int)
        or not 0 < config.port <= 65535
    ):
        raise TVUrlConstructionFailed(f"Invalid port: {config.port!r}")
    if not config.path.startswith("/") or any(ch in "?#" for ch in config.path):
        raise TVUrlConstructionFailed(f"Invalid path: {config.path!r}")

    host = _format_host(config.ip_address)

    query = f"name={quote(config.app_base64, safe=_QUERY_SAFE)}"
    if config.token:
        query += f"&token={quote(config.token, safe=_QUERY_SAFE)}"

    url = f"{config.scheme}://{host}:{config.port}{quote(config.path)}?{query}"

    try:
        parts = urlsplit(url)
        parts.port  # noqa: B018 - raises ValueError on a malformed netloc
    except ValueError as err:
        raise TVUrlConstructionFailed(f"Invalid URL: {url}") from err
    if not parts.hostname:
        raise TVUrlConstructionFailed(f"Invalid URL: {url}")
    return url
