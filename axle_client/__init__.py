"""
axle_client
===========
Python bindings for the ApiAxle management API.

Provides:
- AxleClient bound to one server (info, ping, resource shortcuts)
- Api, Key and KeyRing resource handles with create/read/update/delete,
  link/unlink, listing, stats and charts
- Typed errors for transport, status, envelope and lifecycle failures
"""

from axle_client.client import AxleClient
from axle_client.config import AxleConfig
from axle_client.constants import ApiFormat, Granularity, HitType, Protocol
from axle_client.errors import (
    AxleError, DeletedResourceError, HTTPStatusError, MalformedResponseError,
    MissingFieldError, NotFoundError, OperationFailedError, ResourceStateError,
    TransportError, UnsupportedOperationError,
)
from axle_client.resources import Api, Key, KeyRing, LifecycleState

__version__ = "0.1.0"

__all__ = [
    "AxleClient",
    "AxleConfig",
    "Api",
    "Key",
    "KeyRing",
    "LifecycleState",
    "ApiFormat",
    "Granularity",
    "HitType",
    "Protocol",
    "AxleError",
    "TransportError",
    "HTTPStatusError",
    "NotFoundError",
    "MalformedResponseError",
    "MissingFieldError",
    "OperationFailedError",
    "ResourceStateError",
    "DeletedResourceError",
    "UnsupportedOperationError",
]
