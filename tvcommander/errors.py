"""Error types for Samsung TV remote-control interactions.

Two families live here. ``TVClientError`` subclasses are raised inside the
transport layer. ``TVCommanderError`` subclasses are the error kinds a
``TVCommander`` reports to its listener; the commander never raises them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .protocol import TVAuthResponse


class TVClientError(Exception):
    """Base error for TV transport failures."""


class TVTimeout(TVClientError):
    """Timeout while communicating with the TV."""


class TVConnectionError(TVClientError):
    """Network connection to the TV failed."""


class TVHandshakeError(TVClientError):
    """WebSocket handshake failed."""


class TVCommanderError(Exception):
    """Base class for errors reported by TVCommander."""


class TVConnectionAlreadyEstablished(TVCommanderError):
    """connect() was called while a connection is open or opening."""


class TVUrlConstructionFailed(TVCommanderError):
    """The configuration cannot be composed into a websocket URL."""


class TVPacketParsingFailed(TVCommanderError):
    """An inbound packet could not be decoded as a handshake response."""


class TVTransportError(TVCommanderError):
    """The underlying transport failed."""

    def __init__(self, cause: BaseException | None) -> None:
        super().__init__(f"Transport error: {cause!r}")
        self.cause = cause


class TVUnexpectedHandshakeEvent(TVCommanderError):
    """A handshake packet carried an event other than connect/unauthorized/timeout."""

    def __init__(self, response: TVAuthResponse) -> None:
        super().__init__(f"Unexpected channel event: {response.event_name}")
        self.response = response


class TVNoTokenInHandshake(TVCommanderError):
    """Authorization was allowed but the handshake carried no usable token."""

    def __init__(self, response: TVAuthResponse) -> None:
        super().__init__("No token in handshake response")
        self.response = response


class TVNotConnected(TVCommanderError):
    """A command was sent while not connected."""


class TVNotAuthorized(TVCommanderError):
    """A command was sent before the TV allowed this client."""


class TVCommandSerializationFailed(TVCommanderError):
    """A remote command could not be serialized."""
