"""Transport layer for the TV remote-control channel.

Components:
- base: transport capability used by TVCommander
- ws: WebSocket connection and TLS setup
- ws_client: WebSocket message iteration and writes
"""

from .base import TVTransport
from .ws import build_ssl_context, connect_aiohttp_websocket, connect_websocket
from .ws_client import TVWsClient, TVWsMessage, TVWsMessageType

__all__ = [
    "TVTransport",
    "TVWsClient",
    "TVWsMessage",
    "TVWsMessageType",
    "build_ssl_context",
    "connect_aiohttp_websocket",
    "connect_websocket",
]
