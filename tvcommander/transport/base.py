"""Transport capability required by TVCommander."""

from __future__ import annotations

import ssl
from collections.abc import AsyncIterator
from typing import Protocol

from .ws_client import TVWsMessage


class TVTransport(Protocol):
    """A single websocket connection to a TV.

    Implementations are used for one connection only: after the stream ends
    the commander discards the instance and asks its factory for a new one.
    """

    async def connect(self, url: str, *, ssl_context: ssl.SSLContext | None = None) -> None:
        """Open the connection. Raises TVClientError subclasses on failure."""
        ...

    async def close(self) -> None: ...

    async def send_text(self, text: str) -> None:
        """Write a text frame, returning once the write completed."""
        ...

    def __aiter__(self) -> AsyncIterator[TVWsMessage]:
        """Yield inbound messages, ending with CLOSED or ERROR."""
        ...
