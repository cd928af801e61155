# axle_client/transport/transport_http.py
from __future__ import annotations
from typing import Optional
import requests

from axle_client.constants import DEFAULT_TIMEOUT
from axle_client.errors import HTTPStatusError, NotFoundError, TransportError
from axle_client.logger import get_logger
from axle_client.transport.transport_base import BaseTransport, Params

log = get_logger("Axle.Transport.HTTP")


class HTTPTransport(BaseTransport):
    """
    HTTP transport for the management API.

    Every call is a single blocking request on a shared requests.Session.
    Bodies go out as JSON; anything outside 2xx is raised as HTTPStatusError
    (NotFoundError for 404) with the response body attached.
    """
    name = "http"

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        super().__init__(base_url)
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(self, method: str, path: str, body=None, params: Optional[Params] = None) -> bytes:
        url = self.url_for(path)
        headers = {"Content-Type": "application/json"}
        data = self.to_bytes(body) if body is not None else None

        log.debug(f"[HTTP {method}] → {url} | params={params}")
        try:
            res = self.session.request(
                method,
                url,
                data=data,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            log.error(f"[HTTP {method}] {url} failed: {e}")
            raise TransportError(f"Unable to {method} api at {url}: {e}", method=method, url=url) from e

        log.debug(f"[HTTP {method}] {res.status_code} {res.reason}")
        if not 200 <= res.status_code < 300:
            log.error(f"[HTTP {method}] {url} {res.status_code}: {res.text}")
            error_cls = NotFoundError if res.status_code == 404 else HTTPStatusError
            raise error_cls(method, url, res.status_code, res.reason or "", res.content)

        return res.content

    def close(self) -> None:
        self.session.close()
