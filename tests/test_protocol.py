"""Tests for handshake parsing and command encoding."""

from __future__ import annotations

import json

import pytest

from tvcommander import (
    TVChannelEvent,
    TVCommandSerializationFailed,
    TVPacketParsingFailed,
    TVRemoteKey,
    create_remote_command,
    parse_auth_response,
)
from tvcommander.protocol import TVPairedClient, decode_text_packet


class TestParseAuthResponse:
    """Tests for parse_auth_response()."""

    def test_connect_with_token_and_clients(self):
        """Test a full connect envelope."""
        packet = json.dumps(
            {
                "event": "ms.channel.connect",
                "data": {
                    "token": "T1",
                    "clients": [
                        {
                            "attributes": {"name": "TXlBcHA=", "token": "T2"},
                            "deviceName": "TXlBcHA=",
                            "isHost": False,
                        }
                    ],
                    "id": "abc",
                },
            }
        ).encode()

        response = parse_auth_response(packet)

        assert response.event is TVChannelEvent.CONNECT
        assert response.event_name == "ms.channel.connect"
        assert response.data is not None
        assert response.data.token == "T1"
        assert response.data.clients == (TVPairedClient(name="TXlBcHA=", token="T2"),)

    def test_event_without_data(self):
        """Test data is optional."""
        response = parse_auth_response(b'{"event": "ms.channel.unauthorized"}')

        assert response.event is TVChannelEvent.UNAUTHORIZED
        assert response.data is None

    def test_null_data(self):
        """Test an explicit null data field."""
        response = parse_auth_response(b'{"event": "ms.channel.timeOut", "data": null}')

        assert response.event is TVChannelEvent.TIMEOUT
        assert response.data is None

    def test_unknown_event_kept_raw(self):
        """Test unknown events survive as strings."""
        response = parse_auth_response(b'{"event": "ed.edenTV.update", "data": {}}')

        assert response.event == "ed.edenTV.update"
        assert response.event_name == "ed.edenTV.update"

    def test_client_without_token(self):
        """Test paired clients may omit their token."""
        packet = b'{"event": "ms.channel.connect", "data": {"clients": [{"attributes": {"name": "eA=="}}]}}'

        response = parse_auth_response(packet)

        assert response.data is not None
        assert response.data.clients == (TVPairedClient(name="eA==", token=None),)

    def test_raw_is_kept(self):
        """Test the decoded JSON is available for error reports."""
        response = parse_auth_response(b'{"event": "ms.error", "data": {"message": "x"}}')

        assert response.raw == {"event": "ms.error", "data": {"message": "x"}}

    @pytest.mark.parametrize(
        "packet",
        [
            b"",
            b"not json",
            b"\xff\xfe\x00",
            b'"ms.channel.connect"',
            b"{}",
            b'{"event": null}',
            b'{"event": "ms.channel.connect", "data": "x"}',
            b'{"event": "ms.channel.connect", "data": {"token": 5}}',
            b'{"event": "ms.channel.connect", "data": {"clients": {}}}',
            b'{"event": "ms.channel.connect", "data": {"clients": [1]}}',
            b'{"event": "ms.channel.connect", "data": {"clients": [{"attributes": []}]}}',
            b'{"event": "ms.channel.connect", "data": {"clients": [{"attributes": {"name": 1}}]}}',
        ],
    )
    def test_invalid_packets(self, packet):
        """Test malformed envelopes raise TVPacketParsingFailed."""
        with pytest.raises(TVPacketParsingFailed):
            parse_auth_response(packet)


class TestDecodeTextPacket:
    """Tests for decode_text_packet()."""

    def test_utf8(self):
        """Test text is encoded as UTF-8."""
        assert decode_text_packet('{"a": "é"}') == '{"a": "é"}'.encode()

    def test_unencodable(self):
        """Test lone surrogates fail."""
        with pytest.raises(TVPacketParsingFailed):
            decode_text_packet("\ud800")


class TestRemoteCommand:
    """Tests for remote command encoding."""

    def test_wire_shape(self):
        """Test the serialized command matches the TV's expected shape."""
        command = create_remote_command("KEY_VOLUP")

        assert command.as_string() == (
            '{"method": "ms.remote.control", "params": {"Cmd": "Click", '
            '"DataOfCmd": "KEY_VOLUP", "Option": false, "TypeOfRemote": "SendRemoteKey"}}'
        )

    def test_enum_key(self):
        """Test TVRemoteKey members are sent by value."""
        command = create_remote_command(TVRemoteKey.KEY_POWER)

        assert command.params.data_of_cmd == "KEY_POWER"
        assert command.as_dict()["params"]["DataOfCmd"] == "KEY_POWER"

    def test_command_is_frozen(self):
        """Test commands are immutable once built."""
        command = create_remote_command("KEY_UP")

        with pytest.raises(AttributeError):
            command.method = "other"  # type: ignore[misc]

    def test_serialization_failure(self):
        """Test unserializable keys raise TVCommandSerializationFailed."""
        command = create_remote_command(object())  # type: ignore[arg-type]

        with pytest.raises(TVCommandSerializationFailed):
            command.as_string()
