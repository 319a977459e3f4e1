"""Pytest configuration and fixtures for tvcommander tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from tvcommander import (
    TVAuthStatus,
    TVCommander,
    TVCommanderError,
    TVCommanderListener,
    TVConnectionConfiguration,
    TVRemoteCommand,
    TVWsMessage,
    TVWsMessageType,
)


class FakeTransport:
    """In-memory transport driven by the test."""

    def __init__(
        self,
        *,
        connect_error: BaseException | None = None,
        write_error: BaseException | None = None,
        connect_gate: asyncio.Event | None = None,
    ) -> None:
        self.connect_error = connect_error
        self.write_error = write_error
        self.connect_gate = connect_gate
        self.url: str | None = None
        self.ssl_context: Any = None
        self.writes: list[str] = []
        self.closed = False
        self._inbox: asyncio.Queue[TVWsMessage] = asyncio.Queue()

    async def connect(self, url: str, *, ssl_context: Any = None) -> None:
        self.url = url
        self.ssl_context = ssl_context
        if self.connect_gate is not None:
            await self.connect_gate.wait()
        if self.connect_error is not None:
            raise self.connect_error

    async def close(self) -> None:
        self.closed = True
        self.push(TVWsMessage(TVWsMessageType.CLOSED))

    async def send_text(self, text: str) -> None:
        if self.write_error is not None:
            raise self.write_error
        self.writes.append(text)

    def push(self, message: TVWsMessage) -> None:
        self._inbox.put_nowait(message)

    def push_text(self, text: str) -> None:
        self.push(TVWsMessage(TVWsMessageType.TEXT, text))

    def push_binary(self, data: bytes) -> None:
        self.push(TVWsMessage(TVWsMessageType.BINARY, data))

    def push_error(self, error: BaseException) -> None:
        self.push(TVWsMessage(TVWsMessageType.ERROR, error=error))

    def push_closed(self) -> None:
        self.push(TVWsMessage(TVWsMessageType.CLOSED))

    def __aiter__(self) -> AsyncIterator[TVWsMessage]:
        return self._iter_messages()

    async def _iter_messages(self) -> AsyncIterator[TVWsMessage]:
        while True:
            message = await self._inbox.get()
            yield message
            if message.type is TVWsMessageType.CLOSED:
                return


class RecordingListener(TVCommanderListener):
    """Listener that records every notification in order."""

    def __init__(self) -> None:
        self.events: list[tuple[Any, ...]] = []

    def on_connected(self) -> None:
        self.events.append(("connected",))

    def on_disconnected(self) -> None:
        self.events.append(("disconnected",))

    def on_auth_status_changed(self, status: TVAuthStatus) -> None:
        self.events.append(("auth", status))

    def on_command_written(self, command: TVRemoteCommand) -> None:
        self.events.append(("written", command))

    def on_error(self, error: TVCommanderError) -> None:
        self.events.append(("error", error))

    @property
    def errors(self) -> list[TVCommanderError]:
        return [event[1] for event in self.events if event[0] == "error"]

    @property
    def statuses(self) -> list[TVAuthStatus]:
        return [event[1] for event in self.events if event[0] == "auth"]

    def names(self) -> list[str]:
        return [event[0] for event in self.events]


def handshake(
    event: str,
    *,
    token: str | None = None,
    clients: list[dict[str, Any]] | None = None,
) -> str:
    """Build a handshake packet as the TV sends it."""
    data: dict[str, Any] = {}
    if token is not None:
        data["token"] = token
    if clients is not None:
        data["clients"] = clients
    return json.dumps({"event": event, "data": data})


@pytest.fixture
def make_handshake() -> Callable[..., str]:
    return handshake


@pytest.fixture
def settle() -> Callable[[], Awaitable[None]]:
    """Let scheduled tasks run until the commander is idle."""

    async def _settle() -> None:
        for _ in range(20):
            await asyncio.sleep(0)

    return _settle


@pytest.fixture
def transports() -> list[FakeTransport]:
    return []


@pytest.fixture
def transport_factory(transports: list[FakeTransport]) -> Callable[[], FakeTransport]:
    def factory() -> FakeTransport:
        transport = FakeTransport()
        transports.append(transport)
        return transport

    return factory


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def tv_config() -> TVConnectionConfiguration:
    return TVConnectionConfiguration.for_tv("192.168.1.2", "MyApp")


@pytest.fixture
def commander(
    tv_config: TVConnectionConfiguration,
    listener: RecordingListener,
    transport_factory: Callable[[], FakeTransport],
) -> TVCommander:
    return TVCommander(tv_config, listener=listener, transport_factory=transport_factory)


@pytest.fixture
def open_connection(
    commander: TVCommander,
    transports: list[FakeTransport],
    settle: Callable[[], Awaitable[None]],
) -> Callable[[], Awaitable[FakeTransport]]:
    """Connect the commander and wait for the transport's connected event."""

    async def _open() -> FakeTransport:
        commander.connect()
        await settle()
        return transports[-1]

    return _open


@pytest.fixture
def authorize(
    open_connection: Callable[[], Awaitable[FakeTransport]],
    settle: Callable[[], Awaitable[None]],
) -> Callable[..., Awaitable[FakeTransport]]:
    """Connect and deliver a successful handshake."""

    async def _authorize(token: str = "T1") -> FakeTransport:
        transport = await open_connection()
        transport.push_text(handshake("ms.channel.connect", token=token))
        await settle()
        return transport

    return _authorize


@pytest.fixture
def fake_transport_cls() -> type[FakeTransport]:
    return FakeTransport


@pytest.fixture
def mock_session() -> MagicMock:
    """Create a mock aiohttp ClientSession."""
    import aiohttp

    return MagicMock(spec=aiohttp.ClientSession)
