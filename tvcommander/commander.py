"""Connection controller for the Samsung TV remote-control channel.

This module provides the API consumers use to drive a TV. It handles:
- Opening and closing the websocket
- Resolving the authorization handshake
- Guarding and writing remote-key commands

Usage:
    commander = TVCommander.for_tv("192.168.1.2", "MyApp", listener=my_listener)
    commander.connect()
    ...  # wait for listener.on_auth_status_changed(TVAuthStatus.ALLOWED)
    commander.send_command(TVRemoteKey.KEY_VOLUP)
    commander.disconnect()
    await commander.wait_closed()

Every method is non-blocking and must be called from the event loop that
runs the connection. Outcomes are delivered to the listener; errors are
reported through ``on_error`` and never raised.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from .auth import TVAuthState, TVAuthStatus
from .config import TVAuthToken, TVConnectionConfiguration
from .errors import (
    TVClientError,
    TVCommanderError,
    TVCommandSerializationFailed,
    TVConnectionAlreadyEstablished,
    TVNotAuthorized,
    TVNotConnected,
    TVPacketParsingFailed,
    TVTransportError,
    TVUrlConstructionFailed,
)
from .protocol import (
    TVRemoteCommand,
    TVRemoteKey,
    create_remote_command,
    decode_text_packet,
    parse_auth_response,
)
from .transport import TVTransport, TVWsClient, TVWsMessageType, build_ssl_context
from .url import build_tv_url

_LOGGER = logging.getLogger(__name__)


class TVCommanderListener:
    """Receives everything a TVCommander reports.

    Subclass and override the callbacks of interest; the defaults do nothing.
    """

    def on_connected(self) -> None:
        """The websocket is open. Authorization is still pending."""

    def on_disconnected(self) -> None:
        """The websocket closed and authorization was reset."""

    def on_auth_status_changed(self, status: TVAuthStatus) -> None:
        """A handshake packet set a new authorization status."""

    def on_command_written(self, command: TVRemoteCommand) -> None:
        """The transport finished writing ``command``."""

    def on_error(self, error: TVCommanderError) -> None:
        """An operation failed and was aborted."""


class TVCommander:
    """Drives one remote-control connection to a TV."""

    def __init__(
        self,
        config: TVConnectionConfiguration,
        *,
        listener: TVCommanderListener | None = None,
        transport_factory: Callable[[], TVTransport] = TVWsClient,
    ) -> None:
        self._config = config
        self._listener = listener or TVCommanderListener()
        self._transport_factory = transport_factory

        self._auth = TVAuthState()
        self._connected = False
        self._transport: TVTransport | None = None
        self._pump_task: asyncio.Task[None] | None = None
        self._pending_tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def for_tv(
        cls,
        tv_ip_address: str,
        app_name: str,
        auth_token: TVAuthToken | None = None,
        **kwargs: Any,
    ) -> TVCommander:
        """Create a commander for the TV's default remote-control channel."""
        config = TVConnectionConfiguration.for_tv(tv_ip_address, app_name, auth_token)
        return cls(config, **kwargs)

    @property
    def tv_config(self) -> TVConnectionConfiguration:
        """Current configuration, including the latest session token."""
        return self._config

    @property
    def auth_status(self) -> TVAuthStatus:
        return self._auth.status

    @property
    def is_connected(self) -> bool:
        return self._connected

    def set_listener(self, listener: TVCommanderListener | None) -> None:
        self._listener = listener or TVCommanderListener()

    # -------------------------------------------------------------------------
    # Public API: Connection Management
    # -------------------------------------------------------------------------

    def connect(self) -> None:
        """Start opening the websocket.

        Returns once the open is scheduled; ``on_connected`` fires when the
        websocket is up.
        """
        if self._connected or self._transport is not None:
            self._report(TVConnectionAlreadyEstablished("Connection already established"))
            return

        try:
            url = build_tv_url(self._config)
        except TVUrlConstructionFailed as err:
            self._report(err)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as err:
            _LOGGER.warning(
                "[%s] connect() called without a running event loop",
                self._config.ip_address,
            )
            self._report(TVTransportError(err))
            return

        _LOGGER.info(
            "[%s] Connecting to %s://%s:%s%s",
            self._config.ip_address,
            self._config.scheme,
            self._config.ip_address,
            self._config.port,
            self._config.path,
        )

        transport = self._transport_factory()
        self._transport = transport
        self._pump_task = loop.create_task(self._run_transport(transport, url))

    def disconnect(self) -> None:
        """Start closing the websocket.

        ``on_disconnected`` fires once the transport has gone away.
        """
        transport = self._transport
        if transport is None:
            _LOGGER.debug("[%s] Disconnect ignored: no transport", self._config.ip_address)
            return

        _LOGGER.info("[%s] Disconnecting", self._config.ip_address)
        if not self._connected:
            # still opening: cancelling is the same as the transport going away
            if self._pump_task is not None:
                self._pump_task.cancel()
            self._handle_disconnected(transport)
            return

        self._spawn(self._close_transport(transport))

    async def wait_closed(self) -> None:
        """Wait until the current connection, if any, has fully ended."""
        task = self._pump_task
        if task is None:
            return
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    # -------------------------------------------------------------------------
    # Public API: Remote Commands
    # -------------------------------------------------------------------------

    def send_command(self, key: TVRemoteKey | str) -> None:
        """Send a click for ``key``.

        Requires an open connection and ALLOWED authorization. The write is
        fire-and-forget: ``on_command_written`` only confirms that the
        transport wrote the frame, not that the TV acted on it.
        """
        if not self._connected:
            self._report(TVNotConnected("Not connected to TV"))
            return
        if self._auth.status is not TVAuthStatus.ALLOWED:
            self._report(
                TVNotAuthorized(f"Authorization status is {self._auth.status.value}")
            )
            return

        command = create_remote_command(key)
        try:
            text = command.as_string()
        except TVCommandSerializationFailed as err:
            self._report(err)
            return

        transport = self._transport
        if transport is None:
            self._report(TVNotConnected("Not connected to TV"))
            return
        self._spawn(self._write_command(transport, command, text))

    # -------------------------------------------------------------------------
    # Internal: Transport Events
    # -------------------------------------------------------------------------

    async def _run_transport(self, transport: TVTransport, url: str) -> None:
        """Open the transport and route its events until it closes."""
        ssl_context = build_ssl_context(self._config.scheme, self._config.trust_policy)

        try:
            await transport.connect(url, ssl_context=ssl_context)
        except asyncio.CancelledError:
            _LOGGER.debug("[%s] Connect cancelled", self._config.ip_address)
            self._handle_disconnected(transport)
            # the open may have completed just before the cancel landed
            await self._discard_transport(transport)
            raise
        except TVClientError as err:
            _LOGGER.warning("[%s] Connection failed: %s", self._config.ip_address, err)
            if transport is self._transport:
                self._transport = None
            self._report(TVTransportError(err))
            return

        self._handle_connected()

        try:
            async for msg in transport:
                if msg.type is TVWsMessageType.TEXT:
                    self._handle_text(msg.data)
                elif msg.type is TVWsMessageType.BINARY:
                    self._handle_packet(msg.data)
                elif msg.type is TVWsMessageType.ERROR:
                    _LOGGER.warning(
                        "[%s] WebSocket error: %s", self._config.ip_address, msg.error
                    )
                    self._report(TVTransportError(msg.error))
                elif msg.type is TVWsMessageType.CLOSED:
                    _LOGGER.info("[%s] WebSocket closed", self._config.ip_address)
                    break
        except asyncio.CancelledError:
            _LOGGER.debug("[%s] Listener cancelled", self._config.ip_address)
            await self._discard_transport(transport)
            raise
        except TVClientError as err:
            _LOGGER.warning("[%s] Client error: %s", self._config.ip_address, err)
            self._report(TVTransportError(err))
        finally:
            self._handle_disconnected(transport)

    def _handle_connected(self) -> None:
        self._connected = True
        _LOGGER.debug("[%s] Connected, awaiting handshake", self._config.ip_address)
        self._notify("on_connected")

    def _handle_disconnected(self, transport: TVTransport) -> None:
        if transport is not self._transport:
            return
        self._connected = False
        self._auth.reset()
        self._transport = None
        _LOGGER.debug("[%s] Disconnected", self._config.ip_address)
        self._notify("on_disconnected")

    def _handle_text(self, text: Any) -> None:
        if not isinstance(text, str):
            self._report(TVPacketParsingFailed("Text frame carried no text"))
            return
        try:
            packet = decode_text_packet(text)
        except TVPacketParsingFailed as err:
            self._report(err)
            return
        self._handle_packet(packet)

    def _handle_packet(self, packet: Any) -> None:
        if not isinstance(packet, bytes):
            self._report(TVPacketParsingFailed("Binary frame carried no data"))
            return
        try:
            response = parse_auth_response(packet)
        except TVPacketParsingFailed as err:
            _LOGGER.warning("[%s] Invalid packet: %s", self._config.ip_address, err)
            self._report(err)
            return

        outcome = self._auth.resolve(response, self._config)
        if outcome.status_changed:
            _LOGGER.info(
                "[%s] Authorization: %s", self._config.ip_address, outcome.status.value
            )
            self._notify("on_auth_status_changed", outcome.status)
        if outcome.token is not None:
            self._config = self._config.with_token(outcome.token)
        if outcome.error is not None:
            self._report(outcome.error)

    # -------------------------------------------------------------------------
    # Internal: Writes
    # -------------------------------------------------------------------------

    async def _write_command(
        self, transport: TVTransport, command: TVRemoteCommand, text: str
    ) -> None:
        try:
            await transport.send_text(text)
        except TVClientError as err:
            _LOGGER.warning(
                "[%s] Failed to send %s: %s",
                self._config.ip_address,
                command.params.data_of_cmd,
                err,
            )
            self._report(TVTransportError(err))
            return
        _LOGGER.debug("[%s] Sent %s", self._config.ip_address, command.params.data_of_cmd)
        self._notify("on_command_written", command)

    async def _close_transport(self, transport: TVTransport) -> None:
        try:
            await transport.close()
        except (TVClientError, OSError) as err:
            _LOGGER.warning("[%s] Close failed: %s", self._config.ip_address, err)
            self._report(TVTransportError(err))

    async def _discard_transport(self, transport: TVTransport) -> None:
        """Close a transport the pump is abandoning, ignoring close failures."""
        try:
            await asyncio.shield(transport.close())
        except (TVClientError, OSError) as err:
            _LOGGER.debug("[%s] Close after cancel failed: %s", self._config.ip_address, err)

    def _spawn(self, coro: Any) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending_tasks.add(task)
        task.add_done_callback(self._pending_tasks.discard)

    # -------------------------------------------------------------------------
    # Internal: Notifications
    # -------------------------------------------------------------------------

    def _report(self, error: TVCommanderError) -> None:
        _LOGGER.debug("[%s] Reporting %s", self._config.ip_address, type(error).__name__)
        self._notify("on_error", error)

    def _notify(self, callback: str, *args: Any) -> None:
        try:
            getattr(self._listener, callback)(*args)
        except Exception as err:
            _LOGGER.exception(
                "[%s] Listener %s error: %s", self._config.ip_address, callback, err
            )
