"""Connection configuration for the Samsung TV remote-control channel."""

from __future__ import annotations

import base64
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

TVAuthToken = str

DEFAULT_REMOTE_CONTROL_PATH = "/api/v2/channels/samsung.remote.control"
DEFAULT_PORT = 8002
DEFAULT_SCHEME = "wss"


class TVTrustPolicy(Enum):
    """How the TV's TLS certificate is evaluated.

    TVs present self-signed certificates, so ACCEPT_ANY skips hostname and
    chain validation entirely. It is the default and it is a security
    relaxation: use VERIFY when the TV's certificate is in the trust store.
    """

    ACCEPT_ANY = "accept_any"
    VERIFY = "verify"


@dataclass(frozen=True, slots=True)
class TVConnectionConfiguration:
    """Parameters for one connection to a TV.

    Every field is fixed for the life of a connection except ``token``, which
    the handshake refreshes through ``with_token``.
    """

    app: str
    ip_address: str
    path: str = DEFAULT_REMOTE_CONTROL_PATH
    port: int = DEFAULT_PORT
    scheme: str = DEFAULT_SCHEME
    token: TVAuthToken | None = None
    trust_policy: TVTrustPolicy = TVTrustPolicy.ACCEPT_ANY

    @classmethod
    def for_tv(
        cls,
        ip_address: str,
        app: str,
        token: TVAuthToken | None = None,
        **overrides: Any,
    ) -> TVConnectionConfiguration:
        """Build a configuration for the default remote-control channel."""
        return cls(app=app, ip_address=ip_address, token=token, **overrides)

    @property
    def app_base64(self) -> str:
        """The app name as the TV sees it in the ``name`` query parameter."""
        return base64.b64encode(self.app.encode("utf-8")).decode("ascii")

    def with_token(self, token: TVAuthToken | None) -> TVConnectionConfiguration:
        return replace(self, token=token)
