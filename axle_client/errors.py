"""
axle_client.errors
------------------
Failure types raised by the client. Nothing is retried: every error aborts the
single operation in progress and reaches the caller unchanged.
"""

from __future__ import annotations
from typing import Optional


class AxleError(Exception):
    pass


class TransportError(AxleError):
    """The request never produced a usable HTTP response."""

    def __init__(self, message: str, method: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.method = method
        self.url = url


class HTTPStatusError(TransportError):
    """The server answered with a non-2xx status. The body is kept for diagnostics."""

    def __init__(self, method: str, url: str, status_code: int, reason: str = "", body: bytes = b""):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(
            f'Unable to {method} api at {url}, server returned status "{status_code} {reason}" ({self.text})',
            method=method,
            url=url,
        )

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8", errors="replace")
        return str(self.body)


class NotFoundError(HTTPStatusError):
    pass


class MalformedResponseError(AxleError):
    """The response was not JSON, or did not have the expected shape."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class MissingFieldError(MalformedResponseError):
    def __init__(self, field: str, kind: str = "resource"):
        super().__init__(f'Unable to parse {kind}: Missing required field "{field}"', key=field)
        self.field = field


class OperationFailedError(AxleError):
    """The server understood the request but reported `results: false`."""


class ResourceStateError(AxleError):
    """Rejected locally because of the handle's lifecycle state."""


class DeletedResourceError(ResourceStateError):
    pass


class UnsupportedOperationError(ResourceStateError):
    pass
