"""Client for the Samsung Smart TV remote-control websocket channel."""

__version__ = "0.1.0"

from .auth import TVAuthOutcome, TVAuthState, TVAuthStatus
from .commander import TVCommander, TVCommanderListener
from .config import (
    DEFAULT_PORT,
    DEFAULT_REMOTE_CONTROL_PATH,
    DEFAULT_SCHEME,
    TVAuthToken,
    TVConnectionConfiguration,
    TVTrustPolicy,
)
from .errors import (
    TVClientError,
    TVCommanderError,
    TVCommandSerializationFailed,
    TVConnectionAlreadyEstablished,
    TVConnectionError,
    TVHandshakeError,
    TVNoTokenInHandshake,
    TVNotAuthorized,
    TVNotConnected,
    TVPacketParsingFailed,
    TVTimeout,
    TVTransportError,
    TVUnexpectedHandshakeEvent,
    TVUrlConstructionFailed,
)
from .protocol import (
    TVAuthResponse,
    TVChannelEvent,
    TVRemoteCommand,
    TVRemoteKey,
    create_remote_command,
    parse_auth_response,
)
from .transport import TVTransport, TVWsClient, TVWsMessage, TVWsMessageType
from .url import build_tv_url

__all__ = [
    "DEFAULT_PORT",
    "DEFAULT_REMOTE_CONTROL_PATH",
    "DEFAULT_SCHEME",
    "TVAuthOutcome",
    "TVAuthResponse",
    "TVAuthState",
    "TVAuthStatus",
    "TVAuthToken",
    "TVChannelEvent",
    "TVClientError",
    "TVCommandSerializationFailed",
    "TVCommander",
    "TVCommanderError",
    "TVCommanderListener",
    "TVConnectionAlreadyEstablished",
    "TVConnectionConfiguration",
    "TVConnectionError",
    "TVHandshakeError",
    "TVNoTokenInHandshake",
    "TVNotAuthorized",
    "TVNotConnected",
    "TVPacketParsingFailed",
    "TVRemoteCommand",
    "TVRemoteKey",
    "TVTimeout",
    "TVTransport",
    "TVTransportError",
    "TVTrustPolicy",
    "TVUnexpectedHandshakeEvent",
    "TVUrlConstructionFailed",
    "TVWsClient",
    "TVWsMessage",
    "TVWsMessageType",
    "__version__",
    "build_tv_url",
    "create_remote_command",
    "parse_auth_response",
]
