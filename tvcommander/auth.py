"""Authorization state for the TV remote-control handshake."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .config import TVAuthToken, TVConnectionConfiguration
from .errors import (
    TVCommanderError,
    TVNoTokenInHandshake,
    TVUnexpectedHandshakeEvent,
)
from .protocol import TVAuthResponse, TVChannelEvent

_LOGGER = logging.getLogger(__name__)


class TVAuthStatus(Enum):
    """Whether the TV has allowed this client to send commands."""

    NONE = "none"
    ALLOWED = "allowed"
    DENIED = "denied"


@dataclass(frozen=True, slots=True)
class TVAuthOutcome:
    """Result of applying one handshake packet.

    ``token`` is set when the packet yielded a session token to adopt.
    ``error`` is set when the packet should be reported to the consumer.
    """

    status_changed: bool
    status: TVAuthStatus
    token: TVAuthToken | None = None
    error: TVCommanderError | None = None


def _resolve_token(
    response: TVAuthResponse, config: TVConnectionConfiguration
) -> TVAuthToken | None:
    """Pick the session token: direct token first, then the paired-client list."""
    if response.data is None:
        return None
    if response.data.token is not None:
        return response.data.token

    app_name = config.app_base64
    for client in response.data.clients:
        if client.name == app_name and client.token is not None:
            return client.token
    return None


class TVAuthState:
    """Tracks the authorization status of one connection.

    Only handshake packets move the status away from NONE, and the owning
    commander resets it whenever the connection drops.
    """

    def __init__(self) -> None:
        self.status = TVAuthStatus.NONE

    def reset(self) -> None:
        self.status = TVAuthStatus.NONE

    def resolve(
        self, response: TVAuthResponse, config: TVConnectionConfiguration
    ) -> TVAuthOutcome:
        """Apply a handshake packet and describe what the consumer should see.

        Args:
            response: Decoded handshake packet.
            config: Current configuration, used to match the paired-client list.

        Returns:
            The outcome of the packet. A connect event stays ALLOWED even when no
            token can be found; the missing token is reported as an error.
        """
        event = response.event

        if event is TVChannelEvent.CONNECT:
            self.status = TVAuthStatus.ALLOWED
            token = _resolve_token(response, config)
            if token is None:
                return TVAuthOutcome(
                    status_changed=True,
                    status=self.status,
                    error=TVNoTokenInHandshake(response),
                )
            return TVAuthOutcome(status_changed=True, status=self.status, token=token)

        if event is TVChannelEvent.UNAUTHORIZED:
            self.status = TVAuthStatus.DENIED
            return TVAuthOutcome(status_changed=True, status=self.status)

        if event is TVChannelEvent.TIMEOUT:
            # the user never answered the prompt on the TV
            self.status = TVAuthStatus.NONE
            return TVAuthOutcome(status_changed=True, status=self.status)

        _LOGGER.debug("Unexpected channel event: %s", response.event_name)
        return TVAuthOutcome(
            status_changed=False,
            status=self.status,
            error=TVUnexpectedHandshakeEvent(response),
        )
