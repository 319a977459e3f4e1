"""WebSocket client wrapper for the TV remote-control channel."""

from __future__ import annotations

import ssl
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

import aiohttp
from aiohttp import WSMsgType
from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosed

from ..errors import TVConnectionError
from .ws import connect_aiohttp_websocket, connect_websocket

if TYPE_CHECKING:
    from collections.abc import AsyncIterator


class TVWsMessageType(Enum):
    """Normalized WebSocket message types."""

    TEXT = "text"
    BINARY = "binary"
    CLOSED = "closed"
    ERROR = "error"


@dataclass(frozen=True)
class TVWsMessage:
    """Normalized WebSocket message payload."""

    type: TVWsMessageType
    data: str | bytes | None = None
    error: BaseException | None = None


class TVWsClient:
    """Wrapper around a TV websocket.

    Uses the websockets library by default. When given an aiohttp session the
    connection is opened with ``session.ws_connect`` instead and aiohttp
    frames are normalized to the same message types.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        ping_interval: int = 20,
        timeout: float = 15.0,
    ) -> None:
        self._session = session
        self._ping_interval = ping_interval
        self._timeout = timeout
        self._ws: ClientConnection | aiohttp.ClientWebSocketResponse | None = None

    async def connect(self, url: str, *, ssl_context: ssl.SSLContext | None = None) -> None:
        """Connect to the TV websocket."""
        if self._session is not None:
            self._ws = await connect_aiohttp_websocket(
                self._session,
                url,
                ssl_context=ssl_context,
                heartbeat=self._ping_interval,
                timeout=self._timeout,
            )
        else:
            self._ws = await connect_websocket(
                url,
                ssl_context=ssl_context,
                ping_interval=self._ping_interval,
                timeout=self._timeout,
            )

    async def close(self) -> None:
        """Close the websocket connection."""
        if self._ws is not None:
            await self._ws.close()

    async def send_text(self, text: str) -> None:
        """Send a text frame and return once the library has written it.

        Raises:
            TVConnectionError: If not connected or the write fails
        """
        if self._ws is None:
            raise TVConnectionError("WebSocket is not connected")
        try:
            if isinstance(self._ws, aiohttp.ClientWebSocketResponse):
                await self._ws.send_str(text)
            else:
                await self._ws.send(text)
        except (ConnectionClosed, OSError, aiohttp.ClientError) as err:
            raise TVConnectionError("WebSocket write failed") from err

    def __aiter__(self) -> AsyncIterator[TVWsMessage]:
        if self._ws is None:
            raise TVConnectionError("WebSocket is not connected")
        return self._iter_messages()

    async def _iter_messages(self) -> AsyncIterator[TVWsMessage]:
        if self._ws is None:
            raise TVConnectionError("WebSocket is not connected")

        try:
            async for msg in self._ws:
                normalized: TVWsMessage | None = self._normalize_message(msg)
                if normalized is None:
                    continue
                yield normalized
        except ConnectionClosed:
            yield TVWsMessage(type=TVWsMessageType.CLOSED)
        except Exception as err:
            yield TVWsMessage(type=TVWsMessageType.ERROR, error=err)
        else:
            # Normal iteration completion means the peer closed gracefully.
            yield TVWsMessage(type=TVWsMessageType.CLOSED)

    @staticmethod
    def _normalize_message(msg: Any) -> TVWsMessage | None:
        """Normalize backend-specific frames into TVWsMessage."""
        if isinstance(msg, bytes):
            return TVWsMessage(TVWsMessageType.BINARY, msg)
        if isinstance(msg, str):
            return TVWsMessage(TVWsMessageType.TEXT, msg)

        msg_type = getattr(msg, "type", None)
        data = getattr(msg, "data", None)

        if msg_type is not None:
            normalized_type = TVWsClient._map_aiohttp_type(msg_type)
            if normalized_type is None:
                return None
            if normalized_type is TVWsMessageType.ERROR:
                error = data if isinstance(data, BaseException) else None
                return TVWsMessage(normalized_type, error=error)
            if normalized_type is TVWsMessageType.CLOSED:
                return TVWsMessage(normalized_type)
            return TVWsMessage(normalized_type, data)

        # Fallback: treat unknown objects as text via their string repr
        return TVWsMessage(TVWsMessageType.TEXT, str(msg))

    @staticmethod
    def _map_aiohttp_type(msg_type: Any) -> TVWsMessageType | None:
        """Map aiohttp WSMsgType enums to internal message types."""
        if msg_type is WSMsgType.TEXT:
            return TVWsMessageType.TEXT

        if msg_type is WSMsgType.BINARY:
            return TVWsMessageType.BINARY

        if msg_type in {WSMsgType.CLOSE, WSMsgType.CLOSING, WSMsgType.CLOSED}:
            return TVWsMessageType.CLOSED

        if msg_type is WSMsgType.ERROR:
            return TVWsMessageType.ERROR

        return None
