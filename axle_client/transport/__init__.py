# axle_client/transport/__init__.py
from __future__ import annotations
from typing import Optional

from axle_client.config import AxleConfig
from axle_client.transport.transport_base import BaseTransport
from axle_client.transport.transport_http import HTTPTransport


def transport_factory(config: Optional[AxleConfig] = None) -> BaseTransport:
    """
    Build the transport selected by config.transport (AXLE_TRANSPORT).
    Only "http" is available.
    """
    config = config or AxleConfig.from_env()
    mode = config.transport.lower()

    if mode == "http":
        return HTTPTransport(config.base_url, timeout=config.timeout)

    raise ValueError(f"Unknown transport: {config.transport}")


__all__ = [
    "BaseTransport",
    "HTTPTransport",
    "transport_factory",
]
