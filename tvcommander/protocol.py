"""Wire messages for the Samsung TV remote-control channel.

The TV speaks JSON over the websocket. Inbound, the first packet resolves the
authorization handshake:

    {"event": "ms.channel.connect",
     "data": {"token": "...",
              "clients": [{"attributes": {"name": "<base64 app>", "token": "..."}}]}}

Outbound, each key press is a single command:

    {"method": "ms.remote.control",
     "params": {"Cmd": "Click", "DataOfCmd": "KEY_VOLUP",
                "Option": false, "TypeOfRemote": "SendRemoteKey"}}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import TVCommandSerializationFailed, TVPacketParsingFailed

PACKET_TEXT_ENCODING = "utf-8"

REMOTE_CONTROL_METHOD = "ms.remote.control"
COMMAND_CLICK = "Click"
REMOTE_TYPE_KEY = "SendRemoteKey"


class TVChannelEvent(Enum):
    """Channel events emitted by the TV."""

    CONNECT = "ms.channel.connect"
    UNAUTHORIZED = "ms.channel.unauthorized"
    TIMEOUT = "ms.channel.timeOut"
    READY = "ms.channel.ready"
    CLIENT_CONNECT = "ms.channel.clientConnect"
    CLIENT_DISCONNECT = "ms.channel.clientDisconnect"
    ERROR = "ms.error"


class TVRemoteKey(Enum):
    """Common remote-control keys."""

    KEY_POWER = "KEY_POWER"
    KEY_POWEROFF = "KEY_POWEROFF"
    KEY_SOURCE = "KEY_SOURCE"
    KEY_HDMI = "KEY_HDMI"
    KEY_TV = "KEY_TV"
    KEY_0 = "KEY_0"
    KEY_1 = "KEY_1"
    KEY_2 = "KEY_2"
    KEY_3 = "KEY_3"
    KEY_4 = "KEY_4"
    KEY_5 = "KEY_5"
    KEY_6 = "KEY_6"
    KEY_7 = "KEY_7"
    KEY_8 = "KEY_8"
    KEY_9 = "KEY_9"
    KEY_VOLUP = "KEY_VOLUP"
    KEY_VOLDOWN = "KEY_VOLDOWN"
    KEY_MUTE = "KEY_MUTE"
    KEY_CHUP = "KEY_CHUP"
    KEY_CHDOWN = "KEY_CHDOWN"
    KEY_UP = "KEY_UP"
    KEY_DOWN = "KEY_DOWN"
    KEY_LEFT = "KEY_LEFT"
    KEY_RIGHT = "KEY_RIGHT"
    KEY_ENTER = "KEY_ENTER"
    KEY_RETURN = "KEY_RETURN"
    KEY_EXIT = "KEY_EXIT"
    KEY_HOME = "KEY_HOME"
    KEY_MENU = "KEY_MENU"
    KEY_GUIDE = "KEY_GUIDE"
    KEY_INFO = "KEY_INFO"
    KEY_TOOLS = "KEY_TOOLS"
    KEY_RED = "KEY_RED"
    KEY_GREEN = "KEY_GREEN"
    KEY_YELLOW = "KEY_YELLOW"
    KEY_BLUE = "KEY_BLUE"
    KEY_PLAY = "KEY_PLAY"
    KEY_PAUSE = "KEY_PAUSE"
    KEY_STOP = "KEY_STOP"
    KEY_REWIND = "KEY_REWIND"
    KEY_FF = "KEY_FF"


@dataclass(frozen=True)
class TVPairedClient:
    """A previously authorized client listed in a handshake packet."""

    name: str | None
    token: str | None = None


@dataclass(frozen=True)
class TVAuthResponseData:
    token: str | None = None
    clients: tuple[TVPairedClient, ...] = ()


@dataclass(frozen=True)
class TVAuthResponse:
    """Decoded handshake envelope.

    ``event`` is a TVChannelEvent when the event string is known, otherwise
    the raw string.
    """

    event: TVChannelEvent | str
    data: TVAuthResponseData | None = None
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def event_name(self) -> str:
        if isinstance(self.event, TVChannelEvent):
            return self.event.value
        return self.event


def decode_text_packet(text: str) -> bytes:
    """Convert a text frame into packet bytes.

    Raises:
        TVPacketParsingFailed: If the text cannot be encoded.
    """
    try:
        return text.encode(PACKET_TEXT_ENCODING)
    except UnicodeEncodeError as err:
        raise TVPacketParsingFailed("Text frame is not valid UTF-8") from err


def _optional_str(value: Any, name: str) -> str | None:
    if value is None or isinstance(value, str):
        return value
    raise TVPacketParsingFailed(f"{name} must be a string, got {type(value).__name__}")


def _parse_clients(value: Any) -> tuple[TVPairedClient, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise TVPacketParsingFailed("data.clients must be a list")

    clients: list[TVPairedClient] = []
    for idx, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise TVPacketParsingFailed(f"data.clients[{idx}] must be an object")
        attributes = entry.get("attributes")
        if not isinstance(attributes, dict):
            raise TVPacketParsingFailed(
                f"data.clients[{idx}].attributes must be an object"
            )
        clients.append(
            TVPairedClient(
                name=_optional_str(attributes.get("name"), "attributes.name"),
                token=_optional_str(attributes.get("token"), "attributes.token"),
            )
        )
    return tuple(clients)


def parse_auth_response(packet: bytes) -> TVAuthResponse:
    """Decode a handshake packet.

    Args:
        packet: Raw packet bytes (JSON).

    Returns:
        The decoded TVAuthResponse.

    Raises:
        TVPacketParsingFailed: If the packet is not a handshake envelope.
    """
    try:
        message = json.loads(packet)
    except (ValueError, TypeError) as err:
        raise TVPacketParsingFailed("Packet is not valid JSON") from err

    if not isinstance(message, dict):
        raise TVPacketParsingFailed("Packet must be a JSON object")

    event_raw = message.get("event")
    if not isinstance(event_raw, str):
        raise TVPacketParsingFailed("event field is required and must be a string")
    try:
        event: TVChannelEvent | str = TVChannelEvent(event_raw)
    except ValueError:
        event = event_raw

    data_raw = message.get("data")
    data: TVAuthResponseData | None = None
    if data_raw is not None:
        if not isinstance(data_raw, dict):
            raise TVPacketParsingFailed("data must be an object")
        data = TVAuthResponseData(
            token=_optional_str(data_raw.get("token"), "data.token"),
            clients=_parse_clients(data_raw.get("clients")),
        )

    return TVAuthResponse(event=event, data=data, raw=message)


@dataclass(frozen=True)
class TVRemoteCommandParams:
    data_of_cmd: str
    cmd: str = COMMAND_CLICK
    option: bool = False
    type_of_remote: str = REMOTE_TYPE_KEY


@dataclass(frozen=True)
class TVRemoteCommand:
    """A single remote-control command."""

    params: TVRemoteCommandParams
    method: str = REMOTE_CONTROL_METHOD

    def as_dict(self) -> dict[str, Any]:
        return {
            "method": self.method,
            "params": {
                "Cmd": self.params.cmd,
                "DataOfCmd": self.params.data_of_cmd,
                "Option": self.params.option,
                "TypeOfRemote": self.params.type_of_remote,
            },
        }

    def as_string(self) -> str:
        """Serialize the command for a text frame.

        Raises:
            TVCommandSerializationFailed: If the command is not JSON-serializable.
        """
        try:
            return json.dumps(self.as_dict())
        except (TypeError, ValueError) as err:
            raise TVCommandSerializationFailed(
                f"Cannot serialize command for key {self.params.data_of_cmd!r}"
            ) from err


def create_remote_command(key: TVRemoteKey | str) -> TVRemoteCommand:
    """Build a click command for ``key``."""
    if isinstance(key, TVRemoteKey):
        key = key.value
    return TVRemoteCommand(params=TVRemoteCommandParams(data_of_cmd=key))
