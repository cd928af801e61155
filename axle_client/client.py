"""
axle_client.client
------------------
Entry point bound to one management server. Holds the configuration and the
transport; resources keep a reference to it and issue every request through it.
"""

from __future__ import annotations
from typing import Any, Dict, Optional

from axle_client import envelope
from axle_client.config import AxleConfig
from axle_client.constants import DEFAULT_FROM, DEFAULT_TO
from axle_client.errors import MalformedResponseError
from axle_client.logger import get_logger, set_level
from axle_client.resources import Api, Key, KeyRing
from axle_client.transport import BaseTransport, transport_factory

log = get_logger("Axle.Client")


class AxleClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[BaseTransport] = None, config: Optional[AxleConfig] = None,
                 log_level: Optional[str] = None):
        self.config = (config or AxleConfig.from_env()).override(base_url=base_url, timeout=timeout)
        self.transport = transport or transport_factory(self.config)
        # loggers are process-wide
        if log_level is not None:
            set_level(log_level)

    @property
    def base_url(self) -> str:
        return self.transport.base_url

    def url_for(self, path: str) -> str:
        return self.transport.url_for(path)

    def request(self, method: str, path: str, body=None, params: Optional[Dict[str, Any]] = None) -> bytes:
        return self.transport.request(method, path, body=body, params=params)

    # ------------------------------------------------------------------
    # Server
    # ------------------------------------------------------------------
    def info(self) -> Dict[str, Any]:
        return envelope.unwrap(self.request("GET", "info"), envelope.RESULTS)

    def ping(self) -> None:
        """Liveness check; the server must answer with the literal body "pong"."""
        text = self.request("GET", "ping").decode("utf-8", errors="replace")
        if text != "pong":
            raise MalformedResponseError(
                f'ApiAxle server at {self.base_url} didn\'t respond with pong, but with "{text}"'
            )
        log.debug(f"[PING] {self.base_url} ok")

    # ------------------------------------------------------------------
    # Shortcuts
    # ------------------------------------------------------------------
    def new_api(self, identifier: str, endpoint: str = "", **fields) -> Api:
        return Api(self, identifier, endpoint=endpoint, **fields)

    def get_api(self, identifier: str) -> Api:
        return Api.get(self, identifier)

    def apis(self, from_: int = DEFAULT_FROM, to: int = DEFAULT_TO) -> Dict[str, Api]:
        return Api.list(self, from_, to)

    def new_key(self, identifier: str, **fields) -> Key:
        return Key(self, identifier, **fields)

    def get_key(self, identifier: str) -> Key:
        return Key.get(self, identifier)

    def keys(self, from_: int = DEFAULT_FROM, to: int = DEFAULT_TO) -> Dict[str, Key]:
        return Key.list(self, from_, to)

    def new_keyring(self, identifier: str) -> KeyRing:
        return KeyRing(self, identifier)

    def get_keyring(self, identifier: str) -> KeyRing:
        return KeyRing.get(self, identifier)

    def keyrings(self, from_: int = DEFAULT_FROM, to: int = DEFAULT_TO) -> Dict[str, KeyRing]:
        return KeyRing.list(self, from_, to)

    # ------------------------------------------------------------------
    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "AxleClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
