"""WebSocket helpers for the TV remote-control transport."""

from __future__ import annotations

import asyncio
import ssl

import aiohttp
import websockets
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import (
    InvalidHandshake,
    InvalidURI,
    WebSocketException,
)

from ..config import TVTrustPolicy
from ..errors import (
    TVConnectionError,
    TVHandshakeError,
    TVTimeout,
)


def build_ssl_context(scheme: str, trust_policy: TVTrustPolicy) -> ssl.SSLContext | None:
    """Build the TLS context for a connection.

    Returns None for plain ``ws``. With ACCEPT_ANY the returned context
    accepts any certificate the TV presents, including self-signed ones.
    """
    if scheme != "wss":
        return None
    ctx = ssl.create_default_context()
    if trust_policy is TVTrustPolicy.ACCEPT_ANY:
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
    return ctx


async def connect_websocket(
    url: str,
    *,
    ssl_context: ssl.SSLContext | None = None,
    ping_interval: int | None = 20,
    timeout: float = 15.0,
) -> ClientConnection:
    """Connect to a TV websocket endpoint with the websockets library.

    Pings from the TV are answered by the library. The frame size limit is
    disabled: the channel pushes unsolicited events such as
    ``ed.installedApp.get`` whose payload grows with the number of installed
    apps, and the library default of 1 MiB would close the connection on them.

    Args:
        url: Full websocket URL, including query
        ssl_context: TLS context for wss URLs
        ping_interval: Interval for ping frames
        timeout: Connection timeout
    """
    try:
        return await asyncio.wait_for(
            websockets.connect(
                url,
                ssl=ssl_context,
                ping_interval=ping_interval,
                close_timeout=5,
                max_size=None,
            ),
            timeout=timeout,
        )
    except TimeoutError as err:
        raise TVTimeout("WebSocket connection timed out") from err
    except (InvalidHandshake, InvalidURI) as err:
        raise TVHandshakeError("WebSocket handshake failed") from err
    except (OSError, WebSocketException) as err:
        raise TVConnectionError("WebSocket connection failed") from err


async def connect_aiohttp_websocket(
    session: aiohttp.ClientSession,
    url: str,
    *,
    ssl_context: ssl.SSLContext | None = None,
    heartbeat: float | None = 20,
    timeout: float = 15.0,
) -> aiohttp.ClientWebSocketResponse:
    """Connect to a TV websocket endpoint through an aiohttp session."""
    try:
        return await asyncio.wait_for(
            session.ws_connect(
                url,
                ssl=ssl_context if ssl_context is not None else True,
                heartbeat=heartbeat,
            ),
            timeout=timeout,
        )
    except TimeoutError as err:
        raise TVTimeout("WebSocket connection timed out") from err
    except aiohttp.WSServerHandshakeError as err:
        raise TVHandshakeError("WebSocket handshake failed") from err
    except (OSError, aiohttp.ClientError) as err:
        raise TVConnectionError("WebSocket connection failed") from err
