from __future__ import annotations
from typing import Any, Dict, Optional
import json

from axle_client.constants import VERSION_ENDPOINT

Params = Dict[str, Any]


class BaseTransport:
    """
    Request/response contract between the resource clients and the server.

    `path` is relative to the versioned base ("api/foo" -> {base}/v1/api/foo).
    Implementations return the raw response body and raise
    TransportError / HTTPStatusError / NotFoundError from axle_client.errors.
    """
    name: str = "base"

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{VERSION_ENDPOINT}{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        body: Optional[bytes | dict] = None,
        params: Optional[Params] = None,
    ) -> bytes:
        raise NotImplementedError

    def close(self) -> None:
        return

    @staticmethod
    def to_bytes(payload: bytes | dict) -> bytes:
        if isinstance(payload, bytes):
            return payload
        return json.dumps(payload, ensure_ascii=False).encode("utf-8")
